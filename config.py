"""
config.py — Core Configuration
==============================
Board defaults, speed-slider bounds and the Flask config classes.

The Flask app loads `Config` (or the class passed to `create_app`) and
then applies any `VISUALIZER_*` environment variables on top, e.g.

    VISUALIZER_LOG_LEVEL=DEBUG VISUALIZER_DEFAULT_SPEED=150 python main.py
"""

# ---------------------------------------------------------------------------
# Board
# ---------------------------------------------------------------------------
GRID_ROWS  = 20
GRID_COLS  = 50
START_NODE = (10, 5)
END_NODE   = (10, 45)

# ---------------------------------------------------------------------------
# Speed slider (raw values; the delay in ms is SPEED_MAX + SPEED_MIN - raw)
# ---------------------------------------------------------------------------
SPEED_MIN     = 10
SPEED_MAX     = 200
DEFAULT_SPEED = 50


# ---------------------------------------------------------------------------
# Flask config objects
# ---------------------------------------------------------------------------
class Config:
    GRID_ROWS     = GRID_ROWS
    GRID_COLS     = GRID_COLS
    START_NODE    = START_NODE
    END_NODE      = END_NODE
    DEFAULT_SPEED = DEFAULT_SPEED
    DEFAULT_ALGO  = "bfs"
    LOG_LEVEL     = "INFO"
    TESTING       = False


class TestingConfig(Config):
    TESTING   = True
    LOG_LEVEL = "DEBUG"
