"""Constants for Maildir Archiver."""

# --- Retention ---
DEFAULT_AGE_DAYS = 30
SECONDS_PER_DAY = 24 * 3600

# --- Maildir layout ---
CUR_SUBDIR = "cur"  # messages already seen by a client
NEW_SUBDIR = "new"  # freshly delivered, unread
INFO_SEPARATOR = ":"
INFO_PREFIX = "2,"
FLAG_SEEN = "S"
FLAG_FLAGGED = "F"

# --- Header normalization ---
# formail rewrites the Status header and prepends an mbox "From " line when missing
DEFAULT_FILTER_COMMAND = ["formail", "-I", "Status: RO"]

# --- Archive sink ---
GZIP_SUFFIX = ".gz"
GZIP_COMPRESSLEVEL = 9

# --- Logging ---
LOG_LEVEL_ENVVAR = "MAILDIR_ARCHIVER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
