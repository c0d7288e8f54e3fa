"""
Row emission: one record plus the column list gives one row of cell values.
"""

from typing import Any, List, Optional, Sequence

from recordsheet.core.coercion import coerce_value
from recordsheet.core.paths import resolve_path
from recordsheet.i18n import Translator
from recordsheet.models import ColumnDef


def emit_row(
    record: Any,
    columns: Sequence[ColumnDef],
    namespace: Optional[str] = None,
    translator: Optional[Translator] = None,
) -> List[Any]:
    """
    Build the ordered cell values for a single record.

    Every row has exactly ``len(columns)`` cells; an unresolved path yields an
    empty (None) cell rather than shortening the row.

    Args:
        record: The record to read from
        columns: Column descriptors in output order
        namespace: Active i18n namespace, used for boolean columns
        translator: Localization backend

    Returns:
        List[Any]: Cell values in column order
    """
    return [
        coerce_value(resolve_path(record, column.path), column, namespace, translator)
        for column in columns
    ]
