import json

# Board cell values
EMPTY = 0            # Clean floor; positive values are dirt units
CHARGING_PAD = -1    # Dock region, always the bottom-left 4x4 block
OBSTACLE = -2        # Impassable furniture; also the off-board sentinel
HAZARD = -3          # Impassable, charged more than an obstacle

# Headings
UP, RIGHT, DOWN, LEFT = 0, 1, 2, 3

# Charging pad / robot geometry
PAD_SIZE = 4
DOCK_CLEARANCE = 8   # no hazards or obstacle growth within this of the pad

# Level generation: one placement attempt per this many cells
HAZARD_DENSITY = 800
OBSTACLE_DENSITY = 200
DIRT_DENSITY = 10
HAZARD_SIZE_RANGE = (4, 12)    # [low, high) per axis
OBSTACLE_SIZE_RANGE = (4, 12)  # [low, high) growth iterations

# State vector layout
WINDOW_SIZE = 20
WINDOW_OFFSET = 9
STATE_SIZE = WINDOW_SIZE * WINDOW_SIZE + 3

# Rewards
FORWARD_COST = -0.05
REVERSE_COST = -1.0
TURN_COST = -0.1
OBSTACLE_PENALTY = -20.0
HAZARD_PENALTY = -50.0
DOCK_REWARD = -0.2
CLEAN_REWARD = 1.0
SUCK_COST = -0.1

DEFAULT_REWARDS = {
    "forward_cost": FORWARD_COST,
    "reverse_cost": REVERSE_COST,
    "turn_cost": TURN_COST,
    "obstacle_penalty": OBSTACLE_PENALTY,
    "hazard_penalty": HAZARD_PENALTY,
    "dock_reward": DOCK_REWARD,
    "clean_reward": CLEAN_REWARD,
    "suck_cost": SUCK_COST,
}


def make_reward_config(overrides=None):
    """Merge reward overrides onto the defaults, rejecting unknown names."""
    rewards = dict(DEFAULT_REWARDS)
    if overrides:
        unknown = set(overrides) - set(DEFAULT_REWARDS)
        if unknown:
            raise ValueError(f"Unknown reward settings: {sorted(unknown)}")
        rewards.update({k: float(v) for k, v in overrides.items()})
    return rewards


def load_reward_config(path):
    """Load reward overrides from a JSON file."""
    with open(path, "r") as f:
        overrides = json.load(f)
    if not isinstance(overrides, dict):
        raise ValueError(f"Reward config {path} must hold a JSON object")
    return make_reward_config(overrides)
