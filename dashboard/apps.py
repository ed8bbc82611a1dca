from django.apps import AppConfig


class DashboardConfig(AppConfig):
    name = "dashboard"
    verbose_name = "Hospital dashboard"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        # Composition root: build the stores once per process.  Views and
        # commands reach them through dashboard.context.get_context().
        from .context import build_context

        self.context = build_context()
