"""WSGI entry point.

Serves the Django application and mounts the Socket.IO endpoint at
``/socket.io/``. The realtime hub is created here, once per process, before
the first request is handled.
"""

import os

from django.core.wsgi import get_wsgi_application

import socketio

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "track_it.settings")

django_application = get_wsgi_application()

from core.realtime.socket_server import create_socket_server  # noqa: E402

sio = create_socket_server()

application = socketio.WSGIApp(sio, django_application)
