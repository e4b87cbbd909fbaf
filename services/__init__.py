"""
Services module for the user-preferences service.
"""
from .preferences_service import PreferencesService, PreferenceStore

__all__ = ["PreferencesService", "PreferenceStore"]
