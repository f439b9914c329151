# orders/urls.py
from django.urls import path
from . import views

app_name = 'orders'

urlpatterns = [
    path('export/', views.export_orders, name='export_orders'),
]
