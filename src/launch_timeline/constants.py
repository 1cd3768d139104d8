"""Global constants for the application."""

import math

# Timer settings
TICK_INTERVAL_MS = 50  # Timer refresh period (20 Hz)
DEFAULT_COUNTDOWN_SECONDS = 60  # Used when the profile has no negative event
DEFAULT_MISSION_DURATION = 3600  # Seconds shown across the arc for an empty span
MISSION_DURATION_STEP = 600  # Derived durations are rounded up to this step

# Animation settings
DEFAULT_FPS = 20  # Default frames per second for exported animations
DEFAULT_ANIMATION_SECONDS = 30.0  # Default length of exported animations

# Viewport geometry
VIEW_WIDTH = 1920  # Default viewport width in pixels
VIEW_HEIGHT = 200  # Default viewport height in pixels
EXPOSED_ARC_DEGREES = 64  # Arc angle visible above the bottom of the viewport

# Angular spans for the two known layouts
FULL_CIRCLE_SPAN = math.pi  # Half a mission duration sweeps half a turn
HALF_ARC_SPAN = math.pi / 2  # Half a mission duration sweeps a quarter turn

# Density transition window, in timer offset seconds
DENSITY_TRANSITION_START = -9.0
DENSITY_TRANSITION_DURATION = 4.0

# Marker colors (RGBA, alpha in 0..1)
COLOR_PAST_PRESENT = (255, 255, 255, 1.0)
COLOR_FUTURE = (255, 255, 255, 0.3)
COLOR_INNER_DOT_START = (255, 255, 255, 0.0)
COLOR_TRANSITION_SECONDS = 1.0  # Width of the fade window centered on "now"

# Render colors
BACKGROUND_COLOR = (0, 0, 0)
ARC_COLOR = (255, 255, 255, 0.3)
CLOCK_COLOR = (255, 255, 255)

# Default mission used when no profile is supplied
DEFAULT_MISSION_NAME = "Starlink"
DEFAULT_VEHICLE = "Falcon 9 Block 5"
DEFAULT_EVENTS = (
    (-300, "ENGINE CHILL"),
    (-65, "STRONGBACK RETRACT"),
    (-10, "STARTUP"),
    (0, "LIFTOFF"),
    (72, "MAX-Q"),
    (145, "MECO"),
    (195, "FAIRING"),
    (380, "ENTRY BURN"),
    (490, "SECO-1"),
    (530, "LANDING"),
)
