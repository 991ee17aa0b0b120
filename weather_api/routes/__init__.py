"""API routes module."""
from . import health
from . import readings
from . import webhook

__all__ = ["health", "readings", "webhook"]
