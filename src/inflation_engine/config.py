from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Tier percentile thresholds (percentile = % of pool strictly above a value)
ELITE_PERCENTILE_THRESHOLD = 10.0   # Top decile
MID_PERCENTILE_THRESHOLD = 40.0     # Next three deciles

# Budget depletion multiplier bounds
BUDGET_DEPLETION_MIN_MULTIPLIER = 0.1
BUDGET_DEPLETION_MAX_MULTIPLIER = 2.0

# Roster positions tracked for position-specific inflation
POSITIONS = ("C", "1B", "2B", "SS", "3B", "OF", "SP", "RP", "UT")

# Inflation trend parameters
TREND_WINDOW_SIZE = 10   # Picks to look back
TREND_THRESHOLD = 2.0    # Percentage-point change to call heating/cooling

# Data-quality diagnostics
DATA_QUALITY_WARNING_INTERVAL_SECONDS = 30.0

# Latency budget for a single recalculation
TARGET_LATENCY_MS = 50.0

# Remote metrics sink
METRICS_TIMEOUT_SECONDS = 2.0
METRICS_MAX_PENDING = 256            # Entries queued before new ones are dropped
METRICS_CLOSE_TIMEOUT_SECONDS = 2.0  # Max wait for the backlog on close()

# Logging
LOG_LEVEL = "INFO"
LOG_DIR = PROJECT_ROOT / "logs"
LOG_FILE_NAME = "inflation_engine.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3
