"""
recordsheet - Export structured records to spreadsheet sheets.

This package turns a collection of records (objects, mappings, pydantic
models, DataFrame rows or SQLAlchemy objects) into a single typed, labelled and
styled worksheet in an openpyxl workbook.

Key Components:
- to_sheet / SheetBuilder: run an export into a new or existing workbook
- exportable / ExportRegistry: register default columns and i18n per record class
- WorkbookSink: openpyxl workbook wrapper receiving sheets, rows and styles
- IterableSource, DataFrameSource, SqlAlchemySource: dataset adapters
- MessageCatalog: dotted-key localization for labels and yes/no values

Usage:
    >>> from recordsheet import to_sheet
    >>> sink = to_sheet(
    ...     [{"id": 1, "active": 0}, {"id": 2, "active": 1}],
    ...     columns=["id", "active"],
    ...     types=["none", "boolean"],
    ... )
    >>> sink.save("records.xlsx")
"""

from recordsheet.builder import EXPORT_OPTIONS, SheetBuilder, to_sheet
from recordsheet.exceptions import ExportConfigurationError, RecordSheetError
from recordsheet.export import WorkbookSink
from recordsheet.i18n import MessageCatalog, NullTranslator, Translator
from recordsheet.models import ColumnDef, ColumnType, ExportConfig, ExportDefaults
from recordsheet.registry import ExportRegistry, describe_columns, exportable, registry
from recordsheet.sources import DataFrameSource, IterableSource, RecordSource, as_source

__version__ = "0.1.0"

__all__ = [
    'to_sheet',
    'SheetBuilder',
    'EXPORT_OPTIONS',
    'exportable',
    'ExportRegistry',
    'registry',
    'describe_columns',
    'WorkbookSink',
    'RecordSource',
    'IterableSource',
    'DataFrameSource',
    'as_source',
    'MessageCatalog',
    'NullTranslator',
    'Translator',
    'ColumnDef',
    'ColumnType',
    'ExportConfig',
    'ExportDefaults',
    'ExportConfigurationError',
    'RecordSheetError',
]
