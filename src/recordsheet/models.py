"""
recordsheet - Data Models Module

This module defines the configuration models used throughout recordsheet.
Pydantic models give every export call a validated, explicit structure instead
of loosely aligned arrays of columns, types and labels.

Key Components:
- ColumnType: Declared semantic type of a column's cell values
- ColumnDef: Per-column descriptor (path, type, label, style handle)
- ExportDefaults: Reusable configuration registered once per record class
- ExportConfig: Merged configuration for a single export call

These models are built fresh for each export (ExportConfig) or once per record
class (ExportDefaults) and are never shared between sinks.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from recordsheet.exceptions import ExportConfigurationError


class ColumnType(str, Enum):
    """
    Declared type of a column.

    ``boolean`` columns are rewritten to ``string`` before emission, since
    spreadsheets have no localized boolean rendering. ``integer`` and
    ``float`` are type hints for the sink only.
    """
    BOOLEAN = "boolean"
    DATE = "date"
    TIME = "time"
    STRING = "string"
    NONE = "none"
    INTEGER = "integer"
    FLOAT = "float"

    @classmethod
    def parse(cls, tag: Union[str, "ColumnType", None]) -> "ColumnType":
        """
        Convert a user supplied type tag into a ColumnType.

        Args:
            tag: A ColumnType, its string value, or None (meaning ``none``)

        Returns:
            ColumnType: The matching enum member

        Raises:
            ExportConfigurationError: If the tag is not a known type
        """
        if tag is None:
            return cls.NONE
        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).lower())
        except ValueError:
            raise ExportConfigurationError(f"Unknown column type: {tag!r}") from None


class ColumnDef(BaseModel):
    """
    Structured descriptor for one output column.

    Attributes:
        path (str): Dotted attribute path resolved against each record
        type (ColumnType): Effective type after the boolean rewrite
        label (Optional[str]): Explicit header label, if the caller supplied one
        boolean (bool): True when the column was declared ``boolean``
        style (Optional[str]): Style handle minted by the sink for data cells
    """
    path: str
    type: ColumnType = ColumnType.NONE
    label: Optional[str] = None
    boolean: bool = False
    style: Optional[str] = None


class ExportDefaults(BaseModel):
    """
    Default export configuration attached to a record class.

    Attributes:
        columns (Optional[List[str]]): Default column paths, None when discovery failed
        i18n (Union[bool, str]): Default i18n flag or namespace
        source (Any): Data source used when a call supplies no ``data``
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    columns: Optional[List[str]] = None
    i18n: Union[bool, str] = False
    source: Any = None


class ExportConfig(BaseModel):
    """
    Fully merged configuration for a single export call.

    Attributes:
        columns (List[ColumnDef]): Output columns in order
        row_style (Optional[Dict[str, Any]]): Uniform style description for data cells
        header_style (Optional[Dict[str, Any]]): Style description for the header row
        namespace (Optional[str]): Active i18n namespace, None when disabled
        sheet_name (str): Name of the worksheet to create
        sink (Any): Workbook sink receiving the sheet
        source (Any): Record source holding the dataset
        empty (bool): True when the source held no records at configuration time
        record_key (str): Underscored record type name used in label lookups
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    columns: List[ColumnDef] = Field(default_factory=list)
    row_style: Optional[Dict[str, Any]] = None
    header_style: Optional[Dict[str, Any]] = None
    namespace: Optional[str] = None
    sheet_name: str = "Sheet"
    sink: Any = None
    source: Any = None
    empty: bool = False
    record_key: str = ""

    @property
    def types(self) -> List[ColumnType]:
        """Effective per-column types, aligned with ``columns``."""
        return [column.type for column in self.columns]


def build_column_defs(
    columns: Sequence[str],
    types: Union[str, ColumnType, Sequence[Any], None] = None,
    labels: Optional[Dict[str, str]] = None,
) -> List[ColumnDef]:
    """
    Combine a column list with type tags and labels into column descriptors.

    A single tag applies to every column. A sequence is aligned by position;
    missing trailing entries default to ``none``.

    Args:
        columns: Ordered column paths
        types: A single type tag or a sequence of tags
        labels: Mapping of column path to explicit header label

    Returns:
        List[ColumnDef]: One descriptor per column, in column order

    Raises:
        ExportConfigurationError: If there are more type tags than columns
    """
    labels = labels or {}
    columns = [str(column) for column in columns]

    if types is None:
        tags = []
    elif isinstance(types, (str, ColumnType)):
        tags = [types] * len(columns)
    else:
        tags = list(types)

    if len(tags) > len(columns):
        raise ExportConfigurationError(
            f"{len(tags)} column types given for {len(columns)} columns"
        )
    tags += [ColumnType.NONE] * (len(columns) - len(tags))

    return [
        ColumnDef(path=path, type=ColumnType.parse(tag), label=labels.get(path))
        for path, tag in zip(columns, tags)
    ]


def rewrite_booleans(columns: List[ColumnDef]) -> List[ColumnDef]:
    """Rewrite boolean columns to ``string`` and flag them as boolean."""
    return [
        column.model_copy(update={"type": ColumnType.STRING, "boolean": True})
        if column.type is ColumnType.BOOLEAN else column
        for column in columns
    ]
