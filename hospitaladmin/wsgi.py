"""
WSGI config for the hospitaladmin project.

Exposes the WSGI callable as ``application``.  The HTTP API works under
plain WSGI; the ``ws/updates/`` refresh channel needs the ASGI entrypoint
in :mod:`hospitaladmin.asgi`.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hospitaladmin.settings')

application = get_wsgi_application()
