"""API endpoints package."""

from . import health
from . import uml
from . import jobs

__all__ = ["health", "uml", "jobs"]
