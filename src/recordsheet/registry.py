"""
Per-class default export configuration.

A record class is registered once with its default columns and i18n flag;
every later export of that class only supplies per-call overrides.

Usage:
    from recordsheet import exportable

    @exportable(columns=["id", "name", "created_at"], i18n=True)
    class User(BaseModel):
        ...

    sink = User.to_sheet(data=users, types=["none", "string", "time"])

When no columns are given, the class's natural attribute set is discovered
from its pydantic fields, dataclass fields, SQLAlchemy mapper, a
``natural_columns()`` classmethod, or the registered source. Discovery that cannot succeed yet
(for example an unreachable data source) leaves the default columns unset.
"""

import dataclasses
import logging
import threading
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel

from recordsheet.models import ExportDefaults

logger = logging.getLogger(__name__)


def describe_columns(record_type: Any, source: Any = None) -> Optional[List[str]]:
    """
    Discover the natural column set of a record type.

    Args:
        record_type: The record class
        source: Optional record source that can describe its own columns

    Returns:
        Optional[List[str]]: Column names, or None when the shape is unknown
    """
    if isinstance(record_type, type):
        if issubclass(record_type, BaseModel):
            return list(record_type.model_fields)
        if dataclasses.is_dataclass(record_type):
            return [field.name for field in dataclasses.fields(record_type)]
        if hasattr(record_type, '__mapper__') or hasattr(record_type, '__table__'):
            from recordsheet.sources.orm import mapped_columns

            columns = mapped_columns(record_type)
            if columns:
                return columns

    natural = getattr(record_type, 'natural_columns', None)
    if callable(natural):
        columns = natural()
        if columns:
            return list(columns)

    if source is not None:
        columns = source.natural_columns()
        if columns:
            return list(columns)

    return None


class ExportRegistry:
    """
    Registry mapping record classes to their default export configuration.

    Registration is written once per class under a lock; lookups are plain
    dictionary reads and walk the class's MRO so subclasses inherit defaults.
    """

    def __init__(self):
        self._defaults: Dict[Any, ExportDefaults] = {}
        self._lock = threading.Lock()

    def register(
        self,
        record_type: Any,
        columns: Optional[Sequence[str]] = None,
        i18n: Union[bool, str] = False,
        source: Any = None,
        replace: bool = False,
    ) -> ExportDefaults:
        """
        Attach default export configuration to a record class.

        Registering a class a second time returns the existing defaults
        unless ``replace`` is set.

        Args:
            record_type: The record class
            columns: Default column paths; discovered when omitted
            i18n: Default i18n flag or namespace
            source: Data source used when an export supplies no ``data``
            replace: Overwrite an existing registration

        Returns:
            ExportDefaults: The registered defaults
        """
        with self._lock:
            existing = self._defaults.get(record_type)
            if existing is not None and not replace:
                return existing

            if columns is None:
                columns = describe_columns(record_type, source)
                if columns is None:
                    logger.warning(
                        "Could not discover columns for %s; pass columns explicitly when exporting",
                        getattr(record_type, '__name__', record_type),
                    )

            defaults = ExportDefaults(
                columns=list(columns) if columns is not None else None,
                i18n=i18n or False,
                source=source,
            )
            self._defaults[record_type] = defaults
            return defaults

    def defaults_for(self, record_type: Any) -> Optional[ExportDefaults]:
        """Return the defaults registered for a class or its nearest registered base."""
        for klass in getattr(record_type, '__mro__', (record_type,)):
            defaults = self._defaults.get(klass)
            if defaults is not None:
                return defaults
        return None

    def is_registered(self, record_type: Any) -> bool:
        return self.defaults_for(record_type) is not None

    def unregister(self, record_type: Any) -> None:
        with self._lock:
            self._defaults.pop(record_type, None)


# Process-wide registry used by the ``exportable`` decorator
registry = ExportRegistry()


def exportable(
    columns: Optional[Sequence[str]] = None,
    i18n: Union[bool, str] = False,
    source: Any = None,
    export_registry: Optional[ExportRegistry] = None,
):
    """
    Class decorator registering default export configuration.

    Also installs a ``to_sheet(**options)`` classmethod that runs an export
    for the class with the registered defaults.

    Args:
        columns: Default column paths; discovered when omitted
        i18n: Default i18n flag or namespace
        source: Default data source for the class
        export_registry: Registry to use instead of the process-wide one
    """
    target_registry = export_registry or registry

    def decorator(cls):
        target_registry.register(cls, columns=columns, i18n=i18n, source=source)

        def to_sheet(klass, translator=None, **options):
            from recordsheet.builder import SheetBuilder

            builder = SheetBuilder(record_type=klass, translator=translator, export_registry=target_registry)
            return builder.build(**options)

        cls.to_sheet = classmethod(to_sheet)
        return cls

    return decorator
