"""Pydantic schemas for planner settings records."""

from .preferences import Preferences

__all__ = ["Preferences"]
