from .team import Team, TeamQuerySet

__all__ = ["Team", "TeamQuerySet"]
