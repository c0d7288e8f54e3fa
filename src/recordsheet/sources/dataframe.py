"""
Record source over a pandas DataFrame.

Each row is exposed as a plain dictionary keyed by the column label as a
string, with missing values (NaN, NaT, pd.NA) normalized to None so they
render as empty cells.
Large frames are walked in positional slices rather than converted at once.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

import numpy as np
import pandas as pd

from recordsheet.core.paths import escape_segment
from recordsheet.sources.base import DEFAULT_BATCH_SIZE, RecordSource

logger = logging.getLogger(__name__)


def _frame_records(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    cleaned = frame.astype(object).where(pd.notna(frame), None)
    # Record keys match the column paths reported by natural_columns
    cleaned.columns = [str(column) for column in cleaned.columns]
    return cleaned.to_dict(orient='records')


class DataFrameSource(RecordSource):
    """
    Wraps a pandas DataFrame.

    Attributes:
        frame (pd.DataFrame): The wrapped frame
    """

    supports_batches = True

    def __init__(self, frame: pd.DataFrame):
        self.frame = frame

    def where(self, **criteria: Any) -> "DataFrameSource":
        """
        Filter rows by column equality; list values match any member.

        Unknown columns match nothing.
        """
        if not criteria:
            return self

        labels = {str(label): label for label in self.frame.columns}
        mask = np.ones(len(self.frame), dtype=bool)
        for column, expected in criteria.items():
            if str(column) not in labels:
                logger.warning("Filter column '%s' not found in DataFrame", column)
                mask &= False
                continue
            series = self.frame[labels[str(column)]]
            if isinstance(expected, (list, tuple, set, frozenset)):
                mask &= series.isin(list(expected)).to_numpy()
            else:
                mask &= (series == expected).to_numpy()
        return DataFrameSource(self.frame[mask])

    def is_empty(self) -> bool:
        return self.frame.empty

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        for batch in self.iter_batches():
            yield from batch

    def iter_batches(self, batch_size: int = DEFAULT_BATCH_SIZE) -> Iterator[List[Dict[str, Any]]]:
        for start in range(0, len(self.frame), batch_size):
            yield _frame_records(self.frame.iloc[start:start + batch_size])

    def natural_columns(self) -> Optional[List[str]]:
        return [escape_segment(column) for column in self.frame.columns]
