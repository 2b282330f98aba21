"""
Tunable game parameters: new-player defaults and progression constants.
"""

# --- New player ---
STARTING_COINS = 100  # start with some coins!
STARTING_LEVEL = 1
STARTING_HEALTH = 50  # every Body Buddy meter starts half full
STARTER_RECIPES = ("veggie-wrap", "garden-salad")
STARTER_SEEDS = {
    "lettuce": 5,
    "carrot": 3,
    "tomato": 3,
}

# --- Garden ---
DEFAULT_PLOT_COUNT = 4  # 2x2 grid
MIN_PLOT_COUNT = 1
MAX_PLOT_COUNT = 9
HARVEST_XP = 10

# --- Progression ---
XP_PER_LEVEL_STEP = 100  # each level needs 100 more XP than the previous one
MAX_LEVEL = 99
HEALTH_MIN = 0
HEALTH_MAX = 100
MAX_STARS = 3

# --- Persistence ---
SCHEMA_VERSION = 1
