"""
Domain Models

SQLAlchemy database models representing core domain entities.
"""

from .base import Base
from .collections import Collection
from .diagrams import Diagram

__all__ = [
    "Base",
    "Collection",
    "Diagram",
]
