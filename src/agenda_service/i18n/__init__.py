"""Localization: translation tables and lookup."""

from agenda_service.i18n.translations import TRANSLATIONS
from agenda_service.i18n.translator import (
    LANGUAGE_STORAGE_KEY,
    Language,
    LanguagePreferenceStore,
    Translator,
    detect_system_language,
)

__all__ = [
    "TRANSLATIONS",
    "LANGUAGE_STORAGE_KEY",
    "Language",
    "LanguagePreferenceStore",
    "Translator",
    "detect_system_language",
]
