"""Global constants for the scoreroom application."""

# Store layout
ROOMS_COLLECTION = "rooms"
STATE_COLLECTION = "state"
VALUE_FIELD = "value"

META_KEY = "meta"
SCORER_PIN_KEY = "scorerPin"
PLAYERS_SLICE = "players"
MATCHES_SLICE = "matches"
TIMER_SLICE = "timer"
MESSAGES_SLICE = "messages"
SLICES = (PLAYERS_SLICE, MATCHES_SLICE, TIMER_SLICE, MESSAGES_SLICE)

ROOM_CODE_LENGTH = 4

# Device storage keys
LAST_ROOM_KEY = "gk_last_room"
CLIENT_ID_KEY = "gk_client_id"
LANGUAGE_KEY = "gk_lang"
SELECTED_PLAYER_KEY = "gk_{code}_me"
SCORER_PIN_CACHE_KEY = "gk_{code}_pin"

DEFAULT_LANGUAGE = "zh"
SUPPORTED_LANGUAGES = ("zh", "en")

# Roles
ROLE_SCORER = "scorer"
ROLE_CONTESTANT = "contestant"

# Match fields
MATCH_PENDING = "pending"
MATCH_COMPLETED = "completed"
MATCH_SCHEDULED = "scheduled"
MATCH_MANUAL = "manual"
MANUAL_ROUND = "M"

# Broadcast
BROADCAST_ALL = "all"
BROADCAST_ALL_NAME = "ALL"
BROADCAST_VISIBLE_MS = 10_000
BROADCAST_DISMISS_MS = 8_000

# Notices
NOTICE_TTL_MS = 3_000
NOTICE_SUCCESS = "success"
NOTICE_WARNING = "warning"
NOTICE_ERROR = "error"

# Timer
TIMER_DEFAULT_MINUTES = 10

# Store adapter
STORE_WRITE_WORKERS = 4

# Device sessions idle this long are closed
DEVICE_IDLE_MS = 30 * 60 * 1000
