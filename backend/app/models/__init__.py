"""
Database models for the Shop Directory API.
"""

from app.models.shop import Shop

__all__ = [
    "Shop",
]
