"""Persistence for user preferences"""

from .preferences import PreferenceStore

__all__ = ["PreferenceStore"]
