"""
recordsheet - Export Package

This package provides the spreadsheet side of an export: an openpyxl-backed
workbook sink and the default per-column style selection.

Key Features:
- Sheet creation with Excel-safe names
- Reusable named styles minted from style descriptions
- Default date, time and wrapped-text styles per column type
- Column width adjustment and saving
"""

from recordsheet.export.styles import (
    DATE_STYLE,
    TIME_STYLE,
    WRAP_STYLE,
    default_style_for,
    select_styles,
)
from recordsheet.export.workbook import SheetWriter, WorkbookSink, as_sink, sanitize_sheet_name

__all__ = [
    'WorkbookSink',        # Main sink wrapping an openpyxl workbook
    'SheetWriter',         # Row writer for a single worksheet
    'as_sink',             # Normalizes the package/sink option
    'sanitize_sheet_name',
    'select_styles',       # Default style selection per column type
    'default_style_for',
    'DATE_STYLE',
    'TIME_STYLE',
    'WRAP_STYLE',
]
