#!/usr/bin/env python
"""Script to run the Django development server with the Socket.IO endpoint."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Run the Django development server.

    runserver loads WSGI_APPLICATION, so the Socket.IO endpoint and the
    realtime hub are available locally exactly as under gunicorn.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "track_it.settings")
    execute_from_command_line([sys.argv[0], "runserver", *sys.argv[1:]])


if __name__ == "__main__":
    main()
