"""
WSGI config for backoffice project.

It exposes the WSGI callable as a module-level variable named ``application``.
"""

# backoffice/wsgi.py
import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'backoffice.settings')

application = get_wsgi_application()
