"""SQLAlchemy models for the dental catalog."""

from catalog.models.product import Product

__all__ = ["Product"]
