GRID_WIDTH = 6
GRID_HEIGHT = 12

# Seconds between automatic stack rises at the start of a match.
RISE_INTERVAL = 6.0
# Every RISE_DECAY_INTERVAL seconds of play the rise interval is multiplied by
# RISE_DECAY_FACTOR, never dropping below RISE_INTERVAL_MIN.
RISE_DECAY_FACTOR = 0.9
RISE_DECAY_INTERVAL = 30.0
RISE_INTERVAL_MIN = 1.0

# One gravity step moves loose blocks a single row.
GRAVITY_STEP_INTERVAL = 0.05
# Readability delay between a match being spotted and the blocks vanishing.
CLEAR_DELAY = 0.3
# Breathing room granted after each successful clear.
RISE_PAUSE_DURATION = 1.5

# Held direction keys: first repeat after the delay, then every interval.
INPUT_REPEAT_DELAY = 0.18
INPUT_REPEAT_INTERVAL = 0.06

GARBAGE_CHAIN_UNIT = 2
GARBAGE_CAP = 24

SCORE_PER_BLOCK = 10

# Attempts at drawing a color that does not complete a run before giving up.
ANTI_MATCH_ATTEMPTS = 10

# Presentation
CELL_SIZE = 32
BOARD_GAP = 96
BOTTOM_MARGIN = 40
