from pathlib import Path

# === Base project path ===
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# === Common directories ===
CONFIG_DIR = PROJECT_ROOT / "config"
LOG_DIR = PROJECT_ROOT  # or change to PROJECT_ROOT / "logs" in future

# === Default files ===
CONSTANTS_PATH = CONFIG_DIR / "constants.json"
LOG_PATH = LOG_DIR / "tsnsched_run.log"
