"""
URL configuration for backoffice project.

The dashboard is a set of JSON and file-download endpoints that sit in
front of the remote store API.
"""
# Main URLs
# backoffice/urls.py
from django.urls import path, include

urlpatterns = [
    path('admin-dashboard/', include('admin_dashboard.urls')),
    path('catalog/', include('catalog.urls')),
    path('orders/', include('orders.urls')),
]
