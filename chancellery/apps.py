from django.apps import AppConfig


class ChancelleryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "chancellery"
    verbose_name = "Chancellerie"
