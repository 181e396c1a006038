"""Flask application factory for the py-memsim web UI.

The ``create_app`` function builds a memory pool, creates a shell, and
returns a Flask app with three endpoints:

- ``GET /`` — render the terminal HTML page with the current map.
- ``POST /api/execute`` — execute a command and return JSON.
- ``GET /api/pool`` — return the pool layout, holes and regions.
"""

from __future__ import annotations

from dataclasses import asdict

from flask import Flask, Response, jsonify, render_template, request

from py_memsim.config import PoolConfig
from py_memsim.memory.pool import MemoryPool
from py_memsim.shell import Shell

_HTTP_BAD_REQUEST = 400


def create_app(config: PoolConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Session settings; defaults to ``PoolConfig()``.

    Returns:
        A configured Flask application ready to serve.

    """
    config = config if config is not None else PoolConfig()
    pool = MemoryPool(config.pool_size, compaction=config.compaction)
    shell = Shell(pool=pool, config=config, allow_scripts=False)

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        return render_template("index.html", size=pool.size, layout=pool.render(config.display_width))

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a shell command and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output`` and ``halted`` fields.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        if shell.exited:
            return jsonify({"output": "Session ended.", "halted": True})

        command = str(data["command"])
        result = shell.execute(command)

        if shell.exited:
            output = "" if result == Shell.EXIT_SENTINEL else result
            return jsonify({"output": output or "Session ended.", "halted": True})

        return jsonify({"output": result, "halted": False})

    @app.route("/api/pool")
    def pool_state() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the pool for live map polling.

        Returns:
            JSON with ``size``, ``layout``, ``holes`` and ``regions``.

        """
        return jsonify(
            {
                "size": pool.size,
                "layout": pool.render(config.display_width),
                "holes": [asdict(hole) for hole in pool.find_free_regions()],
                "regions": [asdict(region) for region in pool.regions()],
            }
        )

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``py-memsim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
