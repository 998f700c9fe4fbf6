GRID_WIDTH = 8
GRID_HEIGHT = 8

# Default token palette. Names only; colours belong to whatever renders the board.
DEFAULT_PALETTE = ('red', 'green', 'blue', 'yellow', 'magenta')

# Shortest run that counts as a match.
MIN_MATCH_LENGTH = 3

# Safety valves. Destroy iterations per swap request before the board is reset,
# shuffles per settle before the board is reset, and layouts tried when filling
# a board from scratch before settling for one without a valid move.
MAX_CASCADE_ITERATIONS = 20
MAX_SHUFFLE_ATTEMPTS = 10
MAX_FILL_ATTEMPTS = 200

# Scoring. Base points per match shape, multiplied by CASCADE_MULTIPLIER once per
# destroy iteration within a single swap request.
CASCADE_MULTIPLIER = 1.5
SHAPE_POINTS = {
    'line3': 50,
    'line4': 100,
    'line5': 200,
    'l_shape': 150,
    't_shape': 150,
    'cross': 200,
}
