from django.apps import AppConfig


class KanisaMainAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'kanisa_main_app'
