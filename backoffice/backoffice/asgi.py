"""
ASGI config for backoffice project.

It exposes the ASGI callable as a module-level variable named ``application``.
"""

# ASGI Configuration
# backoffice/asgi.py
import os
from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'backoffice.settings')

application = get_asgi_application()
