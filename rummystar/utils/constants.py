"""Game constants for Rummy Star."""

# Snapshot version tag written on export
APP_VERSION = "v17.0.0"

# Default store key for the single local session
SESSION_KEY = "rummyStarSession"

# Thresholds
DEFAULT_OUT_LIMIT = 220
DEFAULT_COMPEL_POINT = 196
DEFAULT_SCOOT_POINT = 25

FIELD_OUT_LIMIT = "out_limit"
FIELD_COMPEL_POINT = "compel_point"
FIELD_SCOOT_POINT = "scoot_point"
THRESHOLD_FIELDS = (FIELD_OUT_LIMIT, FIELD_COMPEL_POINT, FIELD_SCOOT_POINT)

# Max score a player can take in a single round
MAX_SCORE_DEFAULT = 80
MAX_SCORE_DOUBLE_ROUND = 160

# The winner of a round always scores zero
WINNER_SCORE = 0

ROUND_NAME_PREFIX = "Game"

# Tactical status labels
STATUS_OUT = "OUT"
STATUS_COMPEL = "COMPEL"
STATUS_SAFE = "SAFE"

# Cosmetic preferences
THEME_CLASSIC = "classic"
THEMES = ["classic", "ocean", "midnight", "forest", "sunset"]

VIEW_STANDARD = "standard"
VIEW_GRID = "grid"
HISTORY_VIEW_MODES = [VIEW_STANDARD, VIEW_GRID]

# Default roster: (id, name). Default players cannot be deleted.
DEFAULT_PLAYERS = [
    ("1", "Rajesh"),
    ("2", "Vinod"),
    ("3", "Shine"),
    ("4", "Keerthy"),
    ("5", "Ratheesh"),
    ("6", "Shiju"),
    ("7", "Kilu"),
]

# Error codes
EMPTY_ROSTER = "empty_roster"
INVALID_SCORE = "invalid_score"
WINNER_COUNT = "winner_count"
ENTRY_PROHIBITED = "entry_prohibited"
EMPTY_LEDGER = "empty_ledger"
IMPORT_FORMAT = "import_format"
INVALID_THRESHOLD = "invalid_threshold"
INVALID_NAME = "invalid_name"
UNKNOWN_PLAYER = "unknown_player"
PROTECTED_PLAYER = "protected_player"
INACTIVE_PLAYER = "inactive_player"
INVALID_PREFERENCE = "invalid_preference"
