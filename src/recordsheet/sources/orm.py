"""
SQLAlchemy Record Source

This module exposes the results of a SQLAlchemy ORM query as records for
export. Mapped instances are read through the normal path resolver, so
relationships can be followed with dotted paths (``author.profile.name``).

Key Features:
- Equality filters applied through the query's WHERE clause
- Streaming with ``yield_per`` so large tables are read in fixed-size batches
- Emptiness checked with grouping removed, so grouped queries are not
  mistaken for empty ones
- Natural column discovery from the mapper; failures are logged and
  reported as "no columns"
"""

import logging
from typing import Any, Iterator, List, Optional

import sqlalchemy
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from recordsheet.core.paths import escape_segment
from recordsheet.exceptions import ExportConfigurationError
from recordsheet.sources.base import DEFAULT_BATCH_SIZE, RecordSource

logger = logging.getLogger(__name__)


def mapped_columns(model: Any) -> Optional[List[str]]:
    """
    Column attribute names of a mapped class.

    Args:
        model: A SQLAlchemy mapped class

    Returns:
        Optional[List[str]]: Attribute keys in mapper order, or None when the
        class is not mapped or its mapper cannot be configured
    """
    try:
        mapper = sqlalchemy.inspect(model, raiseerr=False)
        if mapper is None or not hasattr(mapper, 'column_attrs'):
            return None
        return [escape_segment(attr.key) for attr in mapper.column_attrs]
    except SQLAlchemyError as e:
        logger.warning("Could not describe columns of %s: %s", getattr(model, '__name__', model), e)
        return None


class SqlAlchemySource(RecordSource):
    """
    Record source over a SQLAlchemy ``select()`` of one mapped entity.

    Attributes:
        session: A synchronous ``sqlalchemy.orm.Session``
        model: The mapped class being exported
        statement: The select statement producing the records
    """

    supports_batches = True

    def __init__(self, session, model, statement=None):
        self.session = session
        self.model = model
        self.statement = statement if statement is not None else select(model)

    def where(self, **criteria: Any) -> "SqlAlchemySource":
        """
        Add equality filters to the query; list values become ``IN`` clauses.

        Raises:
            ExportConfigurationError: If a criterion names an unknown attribute
        """
        if not criteria:
            return self

        statement = self.statement
        for key, expected in criteria.items():
            column = getattr(self.model, key, None)
            if column is None:
                raise ExportConfigurationError(f"{self.model.__name__} has no attribute {key!r} to filter on")
            if isinstance(expected, (list, tuple, set, frozenset)):
                statement = statement.where(column.in_(list(expected)))
            else:
                statement = statement.where(column == expected)
        return SqlAlchemySource(self.session, self.model, statement)

    def is_empty(self) -> bool:
        probe = self.statement.group_by(None).order_by(None).limit(1)
        return self.session.execute(probe).first() is None

    def __iter__(self) -> Iterator[Any]:
        return iter(self.session.scalars(self.statement))

    def iter_batches(self, batch_size: int = DEFAULT_BATCH_SIZE) -> Iterator[List[Any]]:
        result = self.session.execute(self.statement, execution_options={"yield_per": batch_size})
        for partition in result.scalars().partitions():
            yield list(partition)

    def natural_columns(self) -> Optional[List[str]]:
        return mapped_columns(self.model)
