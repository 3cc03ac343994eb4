# --- Display ---
WIDTH = 800
HEIGHT = 600
FPS = 120                   # ticks per second driven by the shell

# --- Player ---
PLAYER_SIZE = 50
LANE_INSET = 50             # distance of both lanes from the screen edges
PLAYER_X = WIDTH // 2 - PLAYER_SIZE // 2

# --- Entities ---
COLLECTIBLE_SIZE = 30
OBSTACLE_WIDTH = 50
OBSTACLE_HEIGHT = 100
SCROLL_STEP = 5             # collectible speed (px/tick)

# --- Difficulty ---
INITIAL_OBSTACLE_SPEED = 5
MAX_OBSTACLE_SPEED = 15
SPEED_INCREASE_INTERVAL = 100   # +1 obstacle speed per this many points
POINTS = 10                 # per collectible taken and per obstacle dodged

# --- Spawn cadence (ticks) ---
COLLECTIBLE_EVERY = 50
OBSTACLE_EVERY = 100
LAYOUT_REROLL_EVERY = 150

SEED_DEFAULT = 12345

# --- Debug ---
DEBUG_EVENTS = False        # print game-over / layout changes

# --- Colors (RGB) ---
COLOR_BG = (0, 0, 0)
COLOR_FG = (255, 255, 255)
COLOR_PLAYER = (0, 255, 255)
COLOR_COLLECTIBLE = (255, 255, 0)
COLOR_DANGER = (255, 0, 0)
COLOR_HUD = (160, 180, 210)
