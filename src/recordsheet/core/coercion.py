"""
Cell value coercion by declared column type.

Spreadsheets have no localized boolean rendering, so boolean columns are
materialized as a language-appropriate "yes"/"no" string at build time.
Date columns drop the time of day. Every other type passes through and is
formatted by the sink through the cell style.
"""

from datetime import date, datetime
from typing import Any, Optional

import numpy as np
import pandas as pd

from recordsheet.core.labels import titleize
from recordsheet.i18n import NullTranslator, Translator
from recordsheet.models import ColumnDef, ColumnType

# Raw values classified as false in boolean columns
FALSE_VALUES = (0, False, None, "0", "false", "")


def boolean_token(value: Any) -> str:
    """
    Classify a raw value as the literal token ``"no"`` or ``"yes"``.

    Example:
        >>> boolean_token("0"), boolean_token("x")
        ('no', 'yes')
    """
    # NaN, NaT and pd.NA count as absent
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return "no"
    try:
        is_false = any(value == candidate for candidate in FALSE_VALUES)
    except (TypeError, ValueError):
        # Array-like values without a scalar truth value
        is_false = False
    return "no" if is_false else "yes"


def localize_boolean(value: Any, namespace: Optional[str] = None, translator: Optional[Translator] = None) -> str:
    """
    Convert a raw value to a localized yes/no string.

    Args:
        value: Raw resolved value
        namespace: Active i18n namespace, None when disabled
        translator: Localization backend

    Returns:
        str: ``"no"``/``"yes"`` when i18n is disabled, otherwise the catalog
             entry for ``{namespace}.generic.{token}`` defaulting to ``"No"``/``"Yes"``
    """
    token = boolean_token(value)
    if not namespace:
        return token
    translator = translator or NullTranslator()
    return translator.translate(f"{namespace}.generic.{token}", default=titleize(token))


def coerce_date(value: Any) -> Any:
    """
    Drop the time of day from a value destined for a date column.

    Dates pass through unchanged; datetimes (pandas Timestamps included),
    numpy datetime64 values and parseable strings are converted. Values that
    cannot be interpreted as a date are returned unchanged.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (np.datetime64, str)):
        parsed = pd.to_datetime(value, errors="coerce")
        if not pd.isna(parsed):
            return parsed.date()
    return value


def coerce_value(
    value: Any,
    column: ColumnDef,
    namespace: Optional[str] = None,
    translator: Optional[Translator] = None,
) -> Any:
    """
    Produce the cell-ready value for one column.

    Args:
        value: Raw value from the path resolver
        column: Column descriptor (after the boolean rewrite)
        namespace: Active i18n namespace
        translator: Localization backend

    Returns:
        The value to write into the cell
    """
    if column.boolean or column.type is ColumnType.BOOLEAN:
        return localize_boolean(value, namespace, translator)
    if column.type is ColumnType.DATE:
        return coerce_date(value)
    return value
