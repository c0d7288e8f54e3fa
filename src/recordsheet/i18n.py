"""
Localization lookups for header labels, sheet names and boolean tokens.

The export pipeline only needs one operation from a localization service:
given a dotted key and a default, return the localized string or the default.
Any object with a ``translate(key, default)`` method satisfies that contract.

Usage:
    from recordsheet.i18n import MessageCatalog

    catalog = MessageCatalog(lang="en")
    catalog.register_messages("activerecord.attributes.user", {
        "email": {"en": "E-mail address", "de": "E-Mail-Adresse"},
    })
    catalog.translate("activerecord.attributes.user.email", default="Email")
"""

from typing import Dict, Optional, Protocol

DEFAULT_LANG = "en"


class Translator(Protocol):
    """Protocol for localization backends used during export."""

    def translate(self, key: str, default: str) -> str:
        """Return the localized string for *key*, or *default* when missing."""
        ...


class NullTranslator:
    """Translator used when no catalog is configured; always returns the default."""

    def translate(self, key: str, default: str) -> str:
        return default


class MessageCatalog:
    """
    In-memory catalog of dotted message keys.

    Messages are stored flat, keyed by their full dotted path, with one entry
    per language. Lookups fall back to the catalog's default language before
    giving up and returning the caller's default.

    Attributes:
        lang (str): Active language code
        messages (Dict[str, Dict[str, str]]): Dotted key -> {lang: text}
    """

    def __init__(self, lang: str = DEFAULT_LANG, messages: Optional[Dict[str, Dict[str, str]]] = None):
        self.lang = lang
        self.messages: Dict[str, Dict[str, str]] = dict(messages or {})

    def register_messages(self, namespace: str, messages: Dict[str, Dict[str, str]]) -> None:
        """
        Register messages under a namespace.

        Args:
            namespace: Namespace prefix (e.g., "activerecord.attributes.user")
            messages: Dictionary of message key -> translations
        """
        for key, value in messages.items():
            self.messages[f"{namespace}.{key}"] = value

    def translate(self, key: str, default: str) -> str:
        entry = self.messages.get(key)
        if entry is None:
            return default

        text = entry.get(self.lang)
        if text is None:
            text = entry.get(DEFAULT_LANG, default)
        return text
