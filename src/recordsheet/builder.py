"""
recordsheet - Sheet Builder

This module drives a complete export: it merges per-call options over the
record class's registered defaults, creates one worksheet in the sink, writes
the header row and then one row per record.

Workflow:
1. Configure: merge options, resolve the dataset and check it for records;
   for a non-empty dataset normalize column types and rewrite boolean
   columns; resolve the i18n namespace, sheet name and sink
2. Short-circuit: an empty dataset returns the sink untouched (no sheet)
3. Header: one label per column via the label resolver
4. Rows: iterate the dataset (in batches when the source supports it) and
   append one emitted row per record
5. Return the sink so callers can add more sheets or save it
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from recordsheet.core.labels import record_key, resolve_label, resolve_namespace, resolve_sheet_name
from recordsheet.core.rows import emit_row
from recordsheet.exceptions import ExportConfigurationError
from recordsheet.export.styles import select_styles
from recordsheet.export.workbook import as_sink
from recordsheet.i18n import NullTranslator, Translator
from recordsheet.models import ExportConfig, build_column_defs, rewrite_booleans
from recordsheet.registry import ExportRegistry, describe_columns, registry
from recordsheet.sources import DEFAULT_BATCH_SIZE, as_source

logger = logging.getLogger(__name__)

# Options consumed by the builder; anything else is a filter criterion
EXPORT_OPTIONS = (
    'columns', 'types', 'labels', 'style', 'header_style', 'i18n',
    'name', 'package', 'sink', 'data', 'as_array',
)


class SheetBuilder:
    """
    Builds one worksheet from a dataset of records.

    Attributes:
        record_type: Record class whose registered defaults apply, or None
        translator (Translator): Localization backend for labels and booleans
        batch_size (int): Records per batch for sources that support batching
    """

    def __init__(
        self,
        record_type: Any = None,
        translator: Optional[Translator] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        export_registry: Optional[ExportRegistry] = None,
    ):
        self.record_type = record_type
        self.translator = translator or NullTranslator()
        self.batch_size = batch_size
        self.registry = export_registry or registry

    def configure(self, **options: Any) -> ExportConfig:
        """
        Merge call-time options over the registered defaults.

        Args:
            **options: Export options; unrecognized keys filter the registered source

        Returns:
            ExportConfig: The configuration for this call

        Raises:
            ExportConfigurationError: If no dataset can be determined, or the
                                      dataset is non-empty and the column
                                      types are malformed
        """
        criteria = {key: value for key, value in options.items() if key not in EXPORT_OPTIONS}
        defaults = self.registry.defaults_for(self.record_type) if self.record_type is not None else None

        # Explicit data bypasses the registered source and its filters
        data = options.get('data')
        if data is not None:
            if criteria:
                logger.warning("Ignoring filter criteria %s for directly supplied data", sorted(criteria))
            source = as_source(data)
        else:
            registered = defaults.source if defaults is not None else None
            if registered is None:
                raise ExportConfigurationError(
                    "No data to export: pass data= or register a source for the record type"
                )
            source = as_source(registered).where(**criteria)
        if options.get('as_array'):
            source = source.to_list()

        # Columns and types only matter when there is something to emit
        empty = source.is_empty()
        column_defs = []
        if not empty:
            columns = options.get('columns')
            if columns is None and defaults is not None:
                columns = defaults.columns
            if columns is None:
                columns = describe_columns(self.record_type, source) if self.record_type is not None else source.natural_columns()

            column_defs = rewrite_booleans(
                build_column_defs(columns or [], options.get('types'), options.get('labels'))
            )

        i18n = options.get('i18n')
        if not i18n and defaults is not None:
            i18n = defaults.i18n
        namespace = resolve_namespace(i18n)

        sheet_name = options.get('name') or resolve_sheet_name(self.record_type, namespace, self.translator)
        package = options.get('package')
        if package is None:
            package = options.get('sink')

        return ExportConfig(
            columns=column_defs,
            row_style=options.get('style'),
            header_style=options.get('header_style'),
            namespace=namespace,
            sheet_name=sheet_name,
            sink=as_sink(package),
            source=source,
            empty=empty,
            record_key=record_key(self.record_type),
        )

    def header_labels(self, config: ExportConfig) -> List[str]:
        """Header label for every column, in column order."""
        labels = {column.path: column.label for column in config.columns if column.label is not None}
        return [
            resolve_label(column.path, labels, config.namespace, config.record_key, self.translator)
            for column in config.columns
        ]

    def _records(self, source) -> Any:
        if source.supports_batches:
            for batch in source.iter_batches(self.batch_size):
                yield from batch
        else:
            yield from source

    def _styles(self, config: ExportConfig) -> Tuple[Any, Optional[str]]:
        row_styles, header_style = select_styles(
            config.sink, config.types, config.row_style, config.header_style
        )
        if isinstance(row_styles, list):
            for column, handle in zip(config.columns, row_styles):
                column.style = handle
        return row_styles, header_style

    def build(self, **options: Any) -> Any:
        """
        Run the export.

        Args:
            **options: See ``EXPORT_OPTIONS``; remaining keys filter the registered source

        Returns:
            The sink, with one new sheet unless the dataset was empty

        Raises:
            ExportConfigurationError: If the dataset is non-empty and no
                                      columns are available
        """
        config = self.configure(**options)

        if config.empty:
            logger.info("No records to export for '%s'; skipping sheet", config.sheet_name)
            return config.sink

        if not config.columns:
            raise ExportConfigurationError(
                f"No columns configured for '{config.sheet_name}': pass columns= or register defaults"
            )

        row_styles, header_style = self._styles(config)

        sheet = config.sink.add_sheet(config.sheet_name)
        sheet.add_row(self.header_labels(config), style=header_style)

        count = 0
        types = config.types
        for record in self._records(config.source):
            sheet.add_row(
                emit_row(record, config.columns, config.namespace, self.translator),
                style=row_styles,
                types=types,
            )
            count += 1

        logger.info("Exporting %d items to '%s' sheet", count, config.sheet_name)
        return config.sink


def to_sheet(
    data: Any = None,
    record_type: Any = None,
    translator: Optional[Translator] = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    **options: Any,
) -> Any:
    """
    Export records into a new sheet.

    Args:
        data: Records to export (iterable, DataFrame or RecordSource); falls
              back to the source registered for ``record_type``
        record_type: Record class whose registered defaults apply
        translator: Localization backend
        batch_size: Records per batch for batch-capable sources
        **options: Export options and filter criteria

    Returns:
        The sink holding the populated workbook

    Example:
        >>> sink = to_sheet([{"id": 1, "active": 0}], columns=["id", "active"],
        ...                 types=["none", "boolean"])
        >>> sink.save("export.xlsx")
    """
    if data is not None:
        options['data'] = data
    builder = SheetBuilder(record_type=record_type, translator=translator, batch_size=batch_size)
    return builder.build(**options)
