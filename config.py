# config.py - Runtime configuration
#
# Plain module-level constants. Anything missing here falls back to the
# defaults baked into the code that reads it.

import logging
import os

BOT_VERSION = "1.0.0"
DEBUG = os.getenv("TRIVIA_DEBUG", "false").lower() == "true"

# Logging
LOG_LEVEL = logging.DEBUG if DEBUG else logging.INFO
LOGS_DIR = os.getenv("TRIVIA_LOGS_DIR", "logs")
LOG_FILE = "trivia.log"
MAX_LOG_SIZE = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3
ENABLE_FILE_LOGGING = True
ENABLE_CONSOLE_LOGGING = True

# Open Trivia DB
OPENTDB_ENABLED = True
OPENTDB_CACHE_SIZE = 20
OPENTDB_REFILL_THRESHOLD = 5
OPENTDB_CATEGORIES = []  # ids or names, e.g. [9, "Computers"]
OPENTDB_DIFFICULTY = None  # "easy", "medium", "hard" or None for any
OPENTDB_RATE_LIMIT_SECONDS = 5.0
OPENTDB_CONNECT_TIMEOUT = 10
OPENTDB_READ_TIMEOUT = 10

# Free-form answer matching
FUZZY_ENABLED = True
FUZZY_MIN_LENGTH = 4
FUZZY_MODE = "per-word"  # "per-word" or "fixed"
FUZZY_BASE_DISTANCE = 1
FUZZY_PER_WORD_DISTANCE = 1

MESSAGES = {
    "true-or-false-prefix": "True or false?",
}
