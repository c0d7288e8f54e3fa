"""
Header label and sheet name resolution.

A column's header is chosen in priority order:
1. An explicit label passed by the caller
2. A localized string looked up as ``{namespace}.{record_key}.{column}``
3. A humanized form of the column path

Key Features:
- Inflection helpers (humanize, titleize, underscore) for readable defaults
- ``i18n=True`` shorthand for the conventional attribute-label namespace
- Sheet names derived from the record type's table name
"""

import re
from typing import Any, Dict, Optional, Union

from recordsheet.i18n import NullTranslator, Translator

# Namespace used when i18n is enabled with a bare ``True``
DEFAULT_I18N_NAMESPACE = "activerecord.attributes"

_CAMEL_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])|([a-z\d])([A-Z])")


def humanize(text: str) -> str:
    """
    Turn an identifier into a readable label.

    Leading underscores and a trailing ``_id`` are dropped, underscores become
    spaces and only the first character is capitalized.

    Example:
        >>> humanize("created_at")
        'Created at'
        >>> humanize("author_id")
        'Author'
    """
    text = str(text).lstrip("_")
    if text.endswith("_id") and len(text) > 3:
        text = text[:-3]
    text = text.replace("_", " ").strip().lower()
    return text[:1].upper() + text[1:]


def titleize(text: str) -> str:
    """Humanize and capitalize every word, e.g. ``"no"`` -> ``"No"``."""
    return " ".join(word[:1].upper() + word[1:] for word in humanize(underscore(text)).split(" "))


def underscore(text: str) -> str:
    """Convert a CamelCase name to snake_case, e.g. ``"BlogPost"`` -> ``"blog_post"``."""
    text = _CAMEL_BOUNDARY.sub(lambda m: "_".join(g for g in m.groups() if g), str(text))
    return text.replace("-", "_").replace("::", "/").lower()


def resolve_namespace(i18n: Union[bool, str, None]) -> Optional[str]:
    """
    Resolve an i18n option into a concrete namespace string.

    Args:
        i18n: ``True`` for the conventional namespace, a namespace string, or a
              falsy value to disable localization

    Returns:
        Optional[str]: The namespace, or None when localization is disabled
    """
    if i18n is True:
        return DEFAULT_I18N_NAMESPACE
    if not i18n:
        return None
    return str(i18n)


def record_key(record_type: Any) -> str:
    """Underscored name of a record type, used as the middle part of label keys."""
    if record_type is None:
        return ""
    return underscore(getattr(record_type, "__name__", record_type))


def table_name(record_type: Any) -> str:
    """Table name of a record type: ``__tablename__`` when defined, else its underscored name."""
    return getattr(record_type, "__tablename__", None) or record_key(record_type)


def resolve_label(
    column: str,
    labels: Optional[Dict[str, str]] = None,
    namespace: Optional[str] = None,
    record_type_key: str = "",
    translator: Optional[Translator] = None,
) -> str:
    """
    Compute the header label for one column.

    Args:
        column: Column path
        labels: Explicit labels keyed by column path
        namespace: Active i18n namespace, None when disabled
        record_type_key: Underscored record type name
        translator: Localization backend

    Returns:
        str: The header label
    """
    if labels and column in labels:
        return labels[column]

    default = humanize(column.replace(".", "_"))
    if namespace:
        translator = translator or NullTranslator()
        key = ".".join(part for part in (namespace, record_type_key, column) if part)
        return translator.translate(key, default=default)
    return default


def resolve_sheet_name(
    record_type: Any,
    namespace: Optional[str] = None,
    translator: Optional[Translator] = None,
) -> str:
    """
    Default worksheet name for a record type.

    Localized as ``{namespace}.{table_name}`` when i18n is active, otherwise
    the humanized table name. Falls back to ``"Sheet"`` without a record type.
    """
    if record_type is None:
        return "Sheet"

    table = table_name(record_type)
    default = humanize(table)
    if namespace:
        translator = translator or NullTranslator()
        return translator.translate(f"{namespace}.{table}", default=default)
    return default
