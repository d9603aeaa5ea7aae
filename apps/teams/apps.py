from django.apps import AppConfig


class TeamsConfig(AppConfig):
    """The qualifying teams, their seed data and the standings board built on them."""

    name = "apps.teams"
    label = "teams"
    verbose_name = "World Cup teams"
    default_auto_field = "django.db.models.BigAutoField"
