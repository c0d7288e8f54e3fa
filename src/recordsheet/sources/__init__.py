"""
Record sources for recordsheet.

Adapters that expose a dataset to the sheet builder:
- IterableSource: lists, tuples and generators of records
- DataFrameSource: pandas DataFrames, iterated in positional batches
- SqlAlchemySource: mapped objects from a SQLAlchemy query, fetched with yield_per

The SQLAlchemy adapter is imported lazily so the ORM is only loaded when it
is actually used.
"""

from typing import Any

import pandas as pd

from recordsheet.sources.base import DEFAULT_BATCH_SIZE, RecordSource
from recordsheet.sources.dataframe import DataFrameSource
from recordsheet.sources.iterable import IterableSource


def as_source(data: Any) -> RecordSource:
    """
    Wrap a dataset in the matching record source.

    Args:
        data: A RecordSource, a pandas DataFrame, or any iterable of records

    Returns:
        RecordSource: The source for the dataset

    Raises:
        TypeError: If data is not iterable
    """
    if isinstance(data, RecordSource):
        return data
    if isinstance(data, pd.DataFrame):
        return DataFrameSource(data)
    try:
        iter(data)
    except TypeError:
        raise TypeError(f"Cannot export records from {type(data).__name__!r}; expected an iterable") from None
    return IterableSource(data)


def __getattr__(name: str):
    if name == "SqlAlchemySource":
        from recordsheet.sources.orm import SqlAlchemySource

        return SqlAlchemySource
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'DEFAULT_BATCH_SIZE',
    'RecordSource',
    'IterableSource',
    'DataFrameSource',
    'SqlAlchemySource',
    'as_source',
]
