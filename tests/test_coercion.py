"""
Unit tests for boolean localization and date coercion.
"""

from datetime import date, datetime, time

import numpy as np
import pandas as pd
import pytest

from recordsheet.core.coercion import (
    FALSE_VALUES,
    boolean_token,
    coerce_date,
    coerce_value,
    localize_boolean,
)
from recordsheet.core.rows import emit_row
from recordsheet.models import ColumnDef, ColumnType, build_column_defs, rewrite_booleans


class TestBooleanToken:
    """Tests for the yes/no classification."""

    @pytest.mark.parametrize("value", FALSE_VALUES)
    def test_false_set(self, value):
        """Every member of the false set is 'no'."""
        assert boolean_token(value) == "no"

    @pytest.mark.parametrize("value", [1, True, "1", "true", "x", "no", 2.5, [0]])
    def test_everything_else_is_yes(self, value):
        assert boolean_token(value) == "yes"

    def test_missing_markers_are_no(self):
        """NaN and NaT count as absent."""
        assert boolean_token(float("nan")) == "no"
        assert boolean_token(pd.NaT) == "no"
        assert boolean_token(np.int64(0)) == "no"


class TestLocalizeBoolean:
    """Tests for boolean rendering with and without i18n."""

    def test_i18n_off_returns_token(self, catalog):
        assert localize_boolean(0, None, catalog) == "no"
        assert localize_boolean(1, None, catalog) == "yes"

    def test_i18n_on_uses_catalog(self, catalog):
        assert localize_boolean(0, "activerecord.attributes", catalog) == "Nein"
        assert localize_boolean("true", "activerecord.attributes", catalog) == "Ja"

    def test_i18n_on_missing_key_title_cases(self, catalog):
        """A namespace without generic entries falls back to 'Yes'/'No'."""
        assert localize_boolean(1, "exports", catalog) == "Yes"
        assert localize_boolean(None, "exports") == "No"


class TestCoerceDate:
    """Tests for date coercion."""

    def test_datetime_drops_time(self):
        assert coerce_date(datetime(2024, 3, 1, 14, 30)) == date(2024, 3, 1)

    def test_timestamp_drops_time(self):
        assert coerce_date(pd.Timestamp("2024-03-01 14:30")) == date(2024, 3, 1)

    def test_date_passes_through(self):
        assert coerce_date(date(2024, 3, 1)) == date(2024, 3, 1)

    def test_string_and_datetime64(self):
        assert coerce_date("2024-03-01T10:00:00") == date(2024, 3, 1)
        assert coerce_date(np.datetime64("2024-03-01T10:00")) == date(2024, 3, 1)

    def test_unparseable_passes_through(self):
        assert coerce_date(None) is None
        assert coerce_date("not a date") == "not a date"
        assert coerce_date(42) == 42


class TestCoerceValue:
    """Tests for per-column coercion and row emission."""

    def test_rewritten_boolean_column(self):
        column = rewrite_booleans([ColumnDef(path="active", type=ColumnType.BOOLEAN)])[0]
        assert column.type is ColumnType.STRING
        assert coerce_value(0, column) == "no"

    def test_time_and_string_pass_through(self):
        moment = datetime(2024, 3, 1, 14, 30)
        assert coerce_value(moment, ColumnDef(path="t", type=ColumnType.TIME)) == moment
        assert coerce_value(time(8, 0), ColumnDef(path="t", type=ColumnType.STRING)) == time(8, 0)

    def test_row_width_matches_columns(self):
        """Every emitted row has one cell per column, even for missing paths."""
        columns = rewrite_booleans(build_column_defs(
            ["id", "created.at", "missing.path", "active"], ["none", "date", "none", "boolean"]
        ))
        row = emit_row({"id": 7, "created": {"at": datetime(2024, 1, 2, 3, 4)}}, columns)
        assert row == [7, date(2024, 1, 2), None, "no"]
