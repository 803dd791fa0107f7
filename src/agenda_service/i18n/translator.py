"""Translation lookup and persisted language preference."""

import json
import os
import re
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from agenda_service.i18n.translations import TRANSLATIONS
from agenda_service.utils.logging import get_logger

logger = get_logger(__name__)

LANGUAGE_STORAGE_KEY = "agenda-language"

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class Language(str, Enum):
    """Supported interface languages."""

    ES = "es"
    EN = "en"


def detect_system_language(environ: Mapping[str, str] | None = None) -> Language:
    """Guess the user's language from the locale environment.

    English locales map to English, everything else to Spanish.
    """
    env = os.environ if environ is None else environ
    for var in ("LC_ALL", "LC_MESSAGES", "LANG", "LANGUAGE"):
        value = env.get(var)
        if value:
            return Language.EN if value.lower().startswith("en") else Language.ES
    return Language.ES


class Translator:
    """Dotted-key lookup into the translation tables of one language."""

    def __init__(self, language: Language | str = Language.ES) -> None:
        self.language = Language(language)

    def set_language(self, language: Language | str) -> None:
        self.language = Language(language)

    def t(self, key: str, params: Mapping[str, Any] | None = None) -> Any:
        """Translate a dotted key.

        Args:
            key: Dotted path such as ``"auth.signIn"``
            params: Values substituted into ``{name}`` placeholders

        Returns:
            The interpolated string, the raw list or table for non-string
            entries, or ``key`` itself when nothing is found.
        """
        value: Any = TRANSLATIONS[self.language.value]
        for part in key.split("."):
            if not isinstance(value, dict):
                value = None
                break
            value = value.get(part)

        if isinstance(value, str):
            if params:
                return _PLACEHOLDER.sub(
                    lambda match: str(params[match.group(1)])
                    if params.get(match.group(1)) is not None
                    else match.group(0),
                    value,
                )
            return value

        return value if value is not None else key


class LanguagePreferenceStore:
    """Persists the chosen language in a small JSON state file.

    The file may hold other keys; only ``agenda-language`` is touched.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read_state(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("language_state_unreadable", path=str(self.path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> Language | None:
        """Return the saved language, or None when nothing valid is stored."""
        saved = self._read_state().get(LANGUAGE_STORAGE_KEY)
        try:
            return Language(saved) if saved else None
        except ValueError:
            logger.warning("language_state_invalid", value=saved)
            return None

    def save(self, language: Language | str) -> None:
        state = self._read_state()
        state[LANGUAGE_STORAGE_KEY] = Language(language).value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(state, f, indent=2)
        logger.debug("language_saved", language=state[LANGUAGE_STORAGE_KEY])

    def initial_language(
        self,
        default: Language | str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Language:
        """Saved language, else the configured default, else the system language."""
        saved = self.load()
        if saved is not None:
            return saved
        if default:
            return Language(default)
        return detect_system_language(environ)
