DEFAULT_WORKERS = 1
DEFAULT_BASE = 10

MIN_BASE = 2
MAX_BASE = 36

KEYS_FIELD = "keys"

WORKERS_ENV = "RECOVERY_WORKERS"
TIE_BREAK_ENV = "RECOVERY_TIE_BREAK"
EXACT_ENV = "RECOVERY_EXACT"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
