GRID_WIDTH = 8
GRID_HEIGHT = 9
COLOR_COUNT = 5

# Supported palette size. Color ids run 1..COLOR_COUNT, 0 is reserved for empty cells.
MIN_COLORS = 2
MAX_COLORS = 15
EMPTY = 0

# Scoring and hazard tuning
BOMB_SCORE = 1000        # points that must accrue before another bomb drops
EXPLOSION_SCORE = 5      # points per exploded cell
BOMB_TIMER = 10          # player moves a freshly dropped bomb survives

# Dead-board avoidance when (re)building the grid
MAX_REFRESH_ATTEMPTS = 200

# Rotation amounts, in 120 degree steps
ROTATION_STEPS = (1, 2)
FULL_TURN_STEPS = 3
