# admin_dashboard/urls.py
from django.urls import path
from . import views

app_name = 'admin_dashboard'

urlpatterns = [
    # Customers
    path('customers/', views.customers_list, name='customers_list'),

    # Blogs
    path('blogs/', views.blogs_list, name='blogs_list'),
    path('blogs/drafts/', views.blog_drafts, name='blog_drafts'),

    # Products
    path('products/', views.products_list, name='products_list'),

    # Newsletter
    path('newsletter/', views.newsletter_list, name='newsletter_list'),
    path('newsletter/export/', views.newsletter_export, name='newsletter_export'),
]
