import os
from dotenv import load_dotenv

load_dotenv()

# Form whose catalog and legacy index table are loaded at startup
FORM_NUMBER = os.getenv("FORMMAPPER_FORM_NUMBER", "FL-320")

# Page render scale for the canvas
ZOOM = float(os.getenv("FORMMAPPER_ZOOM", "1.25"))

# --- Field positioning (percentage points) ---
ADJUST_STEP = float(os.getenv("FORMMAPPER_ADJUST_STEP", "1.0"))       # position panel buttons
GRID_SIZE = float(os.getenv("FORMMAPPER_GRID_SIZE", "5"))             # snap-to-grid spacing
ARROW_STEP = float(os.getenv("FORMMAPPER_ARROW_STEP", "0.5"))         # arrow key
ARROW_STEP_FAST = float(os.getenv("FORMMAPPER_ARROW_STEP_FAST", "5"))  # shift + arrow key

# Drawn rectangles at or under this size (px, both axes) are stray clicks
DRAW_MIN_PX = float(os.getenv("FORMMAPPER_DRAW_MIN_PX", "10"))

# ~60fps; pointer-move and key-repeat updates coalesce into one flush per interval
FRAME_INTERVAL_MS = int(os.getenv("FORMMAPPER_FRAME_INTERVAL_MS", "16"))

# --- Logging ---
LOG_LEVEL = os.getenv("FORMMAPPER_LOG_LEVEL", "warning").upper()
LOG_FILE = os.getenv("FORMMAPPER_LOG_FILE", "formmapper.log")
