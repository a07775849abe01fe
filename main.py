"""
main.py — Grid Pathfinding Visualizer Flask App
================================================
JSON API in front of the replay engine.  The browser front end (or any
client) sends user intents and polls for state; no HTML is rendered here.

Routes:
  GET  /api/state              – current state (polling drives autoplay)
  GET  /api/algorithms         – algorithm cards
  GET  /api/mazes              – maze / preset factories
  POST /api/grid/wall          – toggle wall            {row, col}
  POST /api/grid/start         – move start             {row, col}
  POST /api/grid/end           – move end               {row, col}
  POST /api/grid/weight        – set cell weight        {row, col, weight}
  POST /api/grid/preset        – load a maze / preset   {name, seed?}
  POST /api/config/algo        – select algorithm       {algo_key, side?}
  POST /api/config/speed       – set raw speed          {speed}
  POST /api/play               – start autoplay
  POST /api/pause              – pause autoplay
  POST /api/step               – one step forward
  POST /api/back               – one step back
  POST /api/step/goto          – scrub to step N        {index}
  POST /api/hold/step          – press-and-hold step
  POST /api/hold/back          – press-and-hold back
  POST /api/hold/release       – release the held button
  POST /api/reset/grid         – fresh board
  POST /api/reset/path         – clear replay, keep layout
  POST /api/compare            – comparison mode        {enabled}

State management:
  One Workspace per app, kept in `app.extensions` (process memory only)
  next to a lock.  Every request takes the lock in `before_request`, then
  calls `workspace.tick()`, so autoplay advances at the client's polling
  rate, catching up on every tick that fell due.  The lock is released in
  `teardown_request`; with the threaded dev server, requests still touch
  the Workspace one at a time.
"""

import logging
import threading
from functools import partial

from flask import Flask, current_app, g, jsonify, request

from config import Config
from grid import create_grid, list_mazes
from algorithms import list_algorithms
from engine import Workspace


EXTENSION_KEY = "visualizer"
LOCK_KEY      = "visualizer.lock"


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config=None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config or Config)
    app.config.from_prefixed_env("VISUALIZER")

    level = app.config["LOG_LEVEL"]
    app.logger.setLevel(level)
    for name in ("grid", "algorithms", "engine"):
        logging.getLogger(name).setLevel(level)

    grid_factory = partial(
        create_grid,
        app.config["GRID_ROWS"],
        app.config["GRID_COLS"],
        tuple(app.config["START_NODE"]),
        tuple(app.config["END_NODE"]),
    )
    app.extensions[EXTENSION_KEY] = Workspace(
        algorithm=app.config["DEFAULT_ALGO"],
        speed=app.config["DEFAULT_SPEED"],
        grid_factory=grid_factory,
    )
    app.extensions[LOCK_KEY] = threading.Lock()

    _register_routes(app)
    _register_error_handlers(app)
    app.logger.info(
        "Visualizer ready: %dx%d board, default algorithm %s",
        app.config["GRID_ROWS"], app.config["GRID_COLS"], app.config["DEFAULT_ALGO"],
    )
    return app


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def get_workspace() -> Workspace:
    return current_app.extensions[EXTENSION_KEY]


def _payload() -> dict:
    return request.get_json(silent=True) or {}


def _require(data: dict, *keys):
    missing = [k for k in keys if k not in data]
    if missing:
        raise ValueError(f"Missing field(s): {', '.join(missing)}")
    return [data[k] for k in keys]


def _number(value, kind=float, name="value"):
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ValueError(f"Field {name!r} must be a number, got {value!r}") from None


def _flag(value, name="value") -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Field {name!r} must be true or false, got {value!r}")
    return value


def _coord(data: dict):
    row, col = _require(data, "row", "col")
    return _number(row, int, "row"), _number(col, int, "col")


def _state(**extra):
    ws = get_workspace()
    include_grid = request.args.get("grid", "1") != "0"
    body = ws.to_dict(include_grid=include_grid)
    body.update(extra)
    return jsonify(body)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def _register_routes(app: Flask) -> None:

    # one request at a time touches the Workspace
    @app.before_request
    def _lock_and_tick():
        current_app.extensions[LOCK_KEY].acquire()
        g.visualizer_locked = True
        get_workspace().tick()

    @app.teardown_request
    def _unlock(exc):
        if g.pop("visualizer_locked", False):
            current_app.extensions[LOCK_KEY].release()

    @app.route("/api/state")
    def api_state():
        return _state()

    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})

    @app.route("/api/mazes")
    def api_mazes():
        return jsonify({
            "mazes": [
                {"key": m.key, "label": m.label, "description": m.description, "tags": m.tags}
                for m in list_mazes()
            ]
        })

    # -- board editing ---------------------------------------------------
    @app.route("/api/grid/wall", methods=["POST"])
    def api_grid_wall():
        changed = get_workspace().toggle_wall(*_coord(_payload()))
        return _state(changed=changed)

    @app.route("/api/grid/start", methods=["POST"])
    def api_grid_start():
        changed = get_workspace().move_start(*_coord(_payload()))
        return _state(changed=changed)

    @app.route("/api/grid/end", methods=["POST"])
    def api_grid_end():
        changed = get_workspace().move_end(*_coord(_payload()))
        return _state(changed=changed)

    @app.route("/api/grid/weight", methods=["POST"])
    def api_grid_weight():
        data = _payload()
        (weight,) = _require(data, "weight")
        get_workspace().set_weight(*_coord(data), _number(weight, float, "weight"))
        return _state()

    @app.route("/api/grid/preset", methods=["POST"])
    def api_grid_preset():
        data = _payload()
        (name,) = _require(data, "name")
        seed = data.get("seed")
        get_workspace().load_preset(name, seed=_number(seed, int, "seed") if seed is not None else None)
        return _state()

    # -- configuration ---------------------------------------------------
    @app.route("/api/config/algo", methods=["POST"])
    def api_config_algo():
        data = _payload()
        (algo_key,) = _require(data, "algo_key")
        get_workspace().select_algorithm(algo_key, side=data.get("side"))
        return _state()

    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        (speed,) = _require(_payload(), "speed")
        get_workspace().change_speed(_number(speed, float, "speed"))
        return _state()

    # -- playback --------------------------------------------------------
    @app.route("/api/play", methods=["POST"])
    def api_play():
        get_workspace().play()
        return _state()

    @app.route("/api/pause", methods=["POST"])
    def api_pause():
        get_workspace().pause()
        return _state()

    @app.route("/api/step", methods=["POST"])
    def api_step():
        moved = get_workspace().step()
        return _state(moved=moved)

    @app.route("/api/back", methods=["POST"])
    def api_back():
        moved = get_workspace().back()
        return _state(moved=moved)

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        (index,) = _require(_payload(), "index")
        get_workspace().seek(_number(index, int, "index"))
        return _state()

    @app.route("/api/hold/step", methods=["POST"])
    def api_hold_step():
        get_workspace().press_step()
        return _state()

    @app.route("/api/hold/back", methods=["POST"])
    def api_hold_back():
        get_workspace().press_back()
        return _state()

    @app.route("/api/hold/release", methods=["POST"])
    def api_hold_release():
        get_workspace().release()
        return _state()

    # -- resets / mode ---------------------------------------------------
    @app.route("/api/reset/grid", methods=["POST"])
    def api_reset_grid():
        get_workspace().reset_grid()
        return _state()

    @app.route("/api/reset/path", methods=["POST"])
    def api_reset_path():
        get_workspace().reset_path()
        return _state()

    @app.route("/api/compare", methods=["POST"])
    def api_compare():
        (enabled,) = _require(_payload(), "enabled")
        get_workspace().set_comparison_mode(_flag(enabled, "enabled"))
        return _state()


def _register_error_handlers(app: Flask) -> None:

    # ConfigurationError is a ValueError: refused runs land here too
    @app.errorhandler(ValueError)
    def handle_value_error(err):
        app.logger.warning("Rejected request to %s: %s", request.path, err)
        return jsonify({"error": str(err)}), 400

    @app.errorhandler(IndexError)
    def handle_index_error(err):
        app.logger.warning("Rejected request to %s: %s", request.path, err)
        return jsonify({"error": str(err)}), 400


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    print("=" * 60)
    print("  Grid Pathfinding Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000/api/state")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000)
