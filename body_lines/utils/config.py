import math
import pathlib


class Config:
    # World
    GROUND_LEVEL = 400.0  # y-coordinate of the ground (screen coordinates, +y is down)
    GROUND_CONTACT_THRESHOLD = 1.0  # Max distance from ground for an endpoint to count as a contact
    BODY_X = 100.0
    BODY_Y = 400.0
    BODY_PRESET = "humanoid"

    # Walker scenario
    TARGET_X = 500.0
    TARGET_Y = 350.0
    TARGET_RADIUS = 20.0
    WALK_SPEED = 5.0  # Base displacement per walk move
    REACH_DISTANCE = 50.0  # Horizontal standoff from the target at which walking stops
    MIN_GROUND_CONTACTS = 2  # Contacts required before a walk or reach move
    MIN_OBJECT_CONTACTS = 3  # Leaf segments that must touch the target for a grab
    REACH_SEGMENTS = {
        "humanoid": ("head", "left_lower_arm", "right_lower_arm", "left_hand", "right_hand"),
        "simple": ("left_arm", "right_arm", "right_leg"),
    }

    # Snowball scenario
    SNOWBALL_TARGET_X = 400.0
    SNOWBALL_TARGET_Y = 300.0
    SNOWBALL_RADIUS = 10.0
    GRAVITY = 9.8  # Positive values pull towards +y (down the screen)
    THROW_STANDOFF = 50.0  # Launch point height above the body base
    FLIGHT_TIME_STEP = 0.1  # Seconds of flight advanced per simulation step
    MAX_FLIGHT_STEPS = 200  # Cap on flight ticks for auto-run loops

    # Driver
    MAX_AUTO_STEPS = 1000
    AUTO_STEP_DELAY = 0.05  # Seconds slept between auto-run steps in text mode
    AUTO_STEP_INTERVAL = 0.05  # Seconds between auto-run steps in GUI mode

    # Rendering
    SCREEN_WIDTH = 800
    SCREEN_HEIGHT = 600
    FPS = 60
    RENDER_SCALE = 1.0
    TRAJECTORY_PREVIEW_STEPS = 120

    # Angles
    TWO_PI = 2.0 * math.pi
    ANGLE_TOLERANCE = 1e-9
    VECTOR_TOLERANCE = 1e-6

    # Event log
    DEFAULT_LOG_FILE = pathlib.Path("simulation_log.txt")  # Relative to the working directory
