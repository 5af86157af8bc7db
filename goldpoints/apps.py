from django.apps import AppConfig


class GoldpointsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "goldpoints"
    verbose_name = "Goldpoints - Loyalty Points Ledger"
