"""Game constants"""

# Hands
HAND_SIZE = 4
MAX_FLOWERS = 3
MAX_SKULLS = 1

# Roster
MAX_NAME_LENGTH = 128
MIN_PLAYERS = 2
FIRST_PLAYER_ID = 1

# Phases
PHASE_SETUP = "setup"
PHASE_PLACEMENT = "placement"
PHASE_BIDDING = "bidding"
PHASE_SELECTION = "selection"

# Snapshots
SCHEMA_VERSION = 1
