"""
Exception classes for recordsheet.

Only configuration problems surface as exceptions. Missing paths, missing
translations and empty datasets are absorbed by the component that detects
them and turned into a fallback value.
"""


class RecordSheetError(Exception):
    """Base class for all recordsheet errors."""
    pass


class ExportConfigurationError(RecordSheetError, ValueError):
    """Raised when an export call cannot be configured.

    Examples:
        - No columns were registered, discovered or passed for the export
        - A ``types`` sequence is longer than the column list
        - An unknown type tag was supplied
        - Neither ``data`` nor a registered data source is available
    """
    pass
