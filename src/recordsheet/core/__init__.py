"""
Core record-to-row transformation pipeline.

This package turns records into spreadsheet rows without touching any
workbook or data store:
- paths: dotted attribute path resolution
- labels: header labels, sheet names and inflection helpers
- coercion: boolean localization and date coercion
- rows: per-record row emission
"""

from recordsheet.core.coercion import FALSE_VALUES, boolean_token, coerce_date, coerce_value, localize_boolean
from recordsheet.core.labels import (
    DEFAULT_I18N_NAMESPACE,
    humanize,
    resolve_label,
    resolve_namespace,
    resolve_sheet_name,
    titleize,
    underscore,
)
from recordsheet.core.paths import escape_segment, resolve_path, split_path
from recordsheet.core.rows import emit_row

__all__ = [
    'DEFAULT_I18N_NAMESPACE',
    'FALSE_VALUES',
    'boolean_token',
    'coerce_date',
    'coerce_value',
    'emit_row',
    'escape_segment',
    'humanize',
    'localize_boolean',
    'resolve_label',
    'resolve_namespace',
    'resolve_path',
    'resolve_sheet_name',
    'split_path',
    'titleize',
    'underscore',
]
