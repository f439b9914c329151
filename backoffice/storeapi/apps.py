from django.apps import AppConfig

class StoreApiConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'storeapi'
    verbose_name = 'Store API'
