"""Endpoints that do not belong to a single app: the health probe and JSON error pages."""

from .custom_handler import json_404_handler, json_500_handler
from .health import health_check

__all__ = ["health_check", "json_404_handler", "json_500_handler"]
