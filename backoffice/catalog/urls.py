# catalog/urls.py
from django.urls import path
from . import views

app_name = 'catalog'

urlpatterns = [
    # Category manager
    path('categories/', views.category_tree, name='category_tree'),
    path('categories/save/', views.save_category, name='create_category'),
    path('categories/<str:category_id>/save/', views.save_category, name='update_category'),
    path('categories/<str:category_id>/delete/', views.delete_category, name='delete_category'),

    # SEO tags
    path('tags/suggest/', views.suggest_product_tags, name='suggest_tags'),
]
