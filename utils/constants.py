import json
from config.paths import CONSTANTS_PATH

"""
Loads configuration constants from config/constants.json and exposes them as module-level variables.
Edit constants.json to change values; import from utils.constants to use in code.
"""

with open(CONSTANTS_PATH, "r", encoding="utf-8") as f:
    _constants = json.load(f)

# Cycle defaults
DEFAULT_NUM_OF_PRTS = _constants["DEFAULT_NUM_OF_PRTS"]
DEFAULT_NUM_OF_SLOTS = _constants["DEFAULT_NUM_OF_SLOTS"]
DEFAULT_SLOT_ARRANGEMENT_MODE = _constants["DEFAULT_SLOT_ARRANGEMENT_MODE"]
DEFAULT_FIRST_CYCLE_START = _constants["DEFAULT_FIRST_CYCLE_START"]

# CP-SAT encoding of real-valued unknowns
FIXED_POINT_SCALE = _constants["FIXED_POINT_SCALE"]
TIME_HORIZON = _constants["TIME_HORIZON"]

# Solver parameters
SOLVER_TIMEOUT = _constants["SOLVER_TIMEOUT"]
SOLVER_SEED = _constants["SOLVER_SEED"]
SOLVER_NUM_WORKERS = _constants["SOLVER_NUM_WORKERS"]
