from django.apps import AppConfig


class BloodConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "blood"
    verbose_name = "Blood inventory"

    def ready(self):
        # creates stock rows for new hospitals
        import blood.signals  # noqa: F401
