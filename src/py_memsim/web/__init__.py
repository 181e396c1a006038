"""Browser-based web UI for py-memsim.

This package provides a Flask application that exposes the allocator
shell through a web browser.  It is an **optional** extra — install with::

    pip install py-memsim[web]

The ``create_app`` factory in ``app.py`` builds a memory pool, creates
a shell, and serves three endpoints:

- ``GET /`` — HTML terminal page.
- ``POST /api/execute`` — execute a shell command and return JSON.
- ``GET /api/pool`` — the pool layout, holes and regions as JSON.
"""
