"""
WSGI config for the cardsite project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'cardsite.settings')

application = get_wsgi_application()
