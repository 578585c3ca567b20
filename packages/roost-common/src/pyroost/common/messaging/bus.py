import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en"

# Shipped as pyroost.common package data
LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"


class MessageStore:
    """Message templates keyed by id, merged from ``locales/<locale>/*.json``."""

    def __init__(self, locale: str = FALLBACK_LOCALE, locales_dir: Optional[Path] = None):
        self.locale = locale
        self._messages: Dict[str, str] = {}
        self._locales_dir = locales_dir or LOCALES_DIR

        if not self._locales_dir.is_dir():
            logger.error(f"Message directory {self._locales_dir} not found. CLI messages will be unavailable.")
            return

        # the fallback locale is loaded first so a partial translation still renders
        for name in dict.fromkeys([FALLBACK_LOCALE, locale]):
            self._messages.update(self._read_locale(name))

    def _read_locale(self, name: str) -> Dict[str, str]:
        locale_path = self._locales_dir / name
        if not locale_path.is_dir():
            logger.error(f"Locale directory for '{name}' not found at {locale_path}")
            return {}

        messages: Dict[str, str] = {}
        for message_file in sorted(locale_path.glob("*.json")):
            try:
                messages.update(json.loads(message_file.read_text("utf-8")))
            except (json.JSONDecodeError, OSError) as e:
                logger.error(f"Failed to load or parse message file {message_file}: {e}")
        logger.debug(f"Loaded {len(messages)} messages for locale '{name}'.")
        return messages

    def get(self, msg_id: str) -> str:
        return self._messages.get(msg_id, f"<{msg_id}>")

    def format(self, msg_id: str, **kwargs: Any) -> str:
        template = self.get(msg_id)
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError) as e:
            logger.warning(f"Formatting error for '{msg_id}': missing key {e}")
            return template


class Renderer(Protocol):
    def success(self, message: str) -> None: ...
    def info(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def data(self, data_string: str) -> None: ...


class MessageBus:
    def __init__(self, store: MessageStore):
        self._store = store
        self._renderer: Optional[Renderer] = None

    def set_renderer(self, renderer: Renderer):
        self._renderer = renderer

    def _emit(self, level: str, text: str) -> None:
        if not self._renderer:
            logger.warning(f"MessageBus renderer not configured. Dropping {level} output.")
            return
        getattr(self._renderer, level)(text)

    def success(self, msg_id: str, **kwargs: Any) -> None:
        self._emit("success", self._store.format(msg_id, **kwargs))

    def info(self, msg_id: str, **kwargs: Any) -> None:
        self._emit("info", self._store.format(msg_id, **kwargs))

    def warning(self, msg_id: str, **kwargs: Any) -> None:
        self._emit("warning", self._store.format(msg_id, **kwargs))

    def error(self, msg_id: str, **kwargs: Any) -> None:
        self._emit("error", self._store.format(msg_id, **kwargs))

    def get(self, msg_id: str, **kwargs: Any) -> str:
        return self._store.format(msg_id, **kwargs)

    def data(self, data_string: str) -> None:
        self._emit("data", data_string)


# The renderer is injected at runtime by the application layer (e.g., CLI).
bus = MessageBus(store=MessageStore(locale=os.getenv("ROOST_LOCALE", FALLBACK_LOCALE)))
