# --- Window ---
WIDTH, HEIGHT = 800, 600
FPS = 60

# --- Field tuning ---
DENSITY = 15000             # px^2 per particle
ATTRACTION_RADIUS = 150     # px
ATTRACTION_DIVISOR = 1500
DAMPING = 0.99              # applied once per frame
CONNECTION_WIDTH = 0.3

# particle attribute ranges, [low, high)
RADIUS_RANGE = (0.5, 2.5)
SPEED_RANGE = (-0.1, 0.1)
ALPHA_RANGE = (0.2, 1.0)
CONNECTION_RANGE = (50.0, 150.0)

# --- Colors ---
BLACK = (0, 0, 0)

# Bright star colors for the dark theme
DARK_STAR_COLORS = [
    (255, 255, 255),  # #ffffff
    (255, 250, 250),  # #fffafa
    (248, 248, 255),  # #f8f8ff
    (230, 230, 250),  # #e6e6fa
    (176, 196, 222),  # #b0c4de
]
# Muted grays for the light theme
LIGHT_STAR_COLORS = [
    (74, 74, 74),
    (90, 90, 90),
    (106, 106, 106),
    (122, 122, 122),
    (138, 138, 138),
]

DARK_CONNECTION_COLOR = (100, 100, 255)
LIGHT_CONNECTION_COLOR = (100, 100, 200)
DARK_CONNECTION_OPACITY = 0.2
LIGHT_CONNECTION_OPACITY = 0.1

DARK_BACKGROUND = BLACK
LIGHT_BACKGROUND = (249, 250, 251)
