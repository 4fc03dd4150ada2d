"""Production server startup script for the Track It API.

This module provides the entry point for starting the Django application
with Gunicorn in production environments (Docker containers, Kubernetes).
"""

import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start the API using Gunicorn.

    The realtime hub keeps room membership in process memory, so every
    socket must land on the same process:
    - A single worker process serves HTTP and Socket.IO traffic
    - 64 threads per worker carry long-polling and websocket connections
    - 60-second timeout for long-running requests
    - Logs to stdout/stderr for container log aggregation
    """
    sys.argv = [
        "gunicorn",
        "track_it.wsgi:application",
        "--bind",
        "0.0.0.0:8000",
        "--workers",
        "1",
        "--threads",
        "64",
        "--timeout",
        "60",
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
