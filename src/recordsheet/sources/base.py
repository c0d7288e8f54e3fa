"""
Base class for record sources.

A record source wraps whatever holds the dataset (a list, a DataFrame, a SQLAlchemy
query) behind the small interface the sheet builder needs:
filtering, an emptiness check, iteration and, optionally, batched iteration
and natural column discovery.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional

# Chunk size used for batched iteration over large datasets
DEFAULT_BATCH_SIZE = 500


class RecordSource(ABC):
    """
    Abstract base class for record sources.

    Subclasses must implement ``where``, ``is_empty`` and ``__iter__``.
    Sources that can page through their data set ``supports_batches`` and
    override ``iter_batches``.
    """

    supports_batches = False

    @abstractmethod
    def where(self, **criteria: Any) -> "RecordSource":
        """
        Return a source restricted to records matching every criterion.

        Args:
            **criteria: Column path -> expected value (a list or tuple matches any member)

        Returns:
            A new RecordSource; ``self`` when there are no criteria
        """
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        """
        Determine whether the source holds no records.

        Adapters relax any grouping that would make the check unrepresentative.
        """
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        pass

    def iter_batches(self, batch_size: int = DEFAULT_BATCH_SIZE) -> Iterator[List[Any]]:
        """
        Yield records in lists of at most ``batch_size``.

        The default implementation chunks ``__iter__``.
        """
        batch: List[Any] = []
        for record in self:
            batch.append(record)
            if len(batch) >= batch_size:
                yield batch
                batch = []
        if batch:
            yield batch

    def natural_columns(self) -> Optional[List[str]]:
        """
        Describe the source's natural column set.

        Returns:
            Optional[List[str]]: Column paths, or None when the source cannot
            describe its shape (e.g. it is unavailable)
        """
        return None

    def to_list(self) -> "RecordSource":
        """Materialize the records eagerly and return a list-backed source."""
        from recordsheet.sources.iterable import IterableSource

        return IterableSource(list(self))
