"""Shared pytest fixtures for recordsheet tests."""

from datetime import date, datetime
from types import SimpleNamespace

import pandas as pd
import pytest

from recordsheet import ExportRegistry, MessageCatalog, WorkbookSink


@pytest.fixture
def flags():
    return [{"id": 1, "active": 0}, {"id": 2, "active": 1}]


@pytest.fixture
def authors():
    return [
        SimpleNamespace(
            id=1,
            name="Alice",
            profile=SimpleNamespace(city="Berlin", joined=date(2020, 1, 5)),
            created=SimpleNamespace(at=datetime(2024, 3, 1, 14, 30, 5)),
            admin=True,
        ),
        SimpleNamespace(
            id=2,
            name="Bob",
            profile=None,
            created=SimpleNamespace(at=datetime(2023, 11, 20, 8, 0, 0)),
            admin=False,
        ),
    ]


@pytest.fixture
def people() -> pd.DataFrame:
    return pd.DataFrame({
        "name": ["Alice", "Bob", "Charlie", "Diana"],
        "age": [30, 45, None, 35],
        "dept": ["eng", "eng", "sales", "hr"],
        "joined": pd.to_datetime(["2020-01-05 09:15", "2019-06-30 00:00", None, "2021-12-01 17:45"]),
    })


@pytest.fixture
def sink() -> WorkbookSink:
    return WorkbookSink()


@pytest.fixture
def export_registry() -> ExportRegistry:
    return ExportRegistry()


@pytest.fixture
def catalog() -> MessageCatalog:
    catalog = MessageCatalog(lang="de")
    catalog.register_messages("activerecord.attributes.generic", {
        "yes": {"en": "Yes", "de": "Ja"},
        "no": {"en": "No", "de": "Nein"},
    })
    catalog.register_messages("activerecord.attributes.user", {
        "name": {"en": "Full name", "de": "Vollständiger Name"},
        "email": {"en": "E-mail"},
    })
    catalog.register_messages("activerecord.attributes", {
        "users": {"en": "Users", "de": "Benutzer"},
    })
    return catalog


@pytest.fixture
def sheet_rows():
    """Cell values of a sink worksheet as a list of tuples."""
    def read(sink, title=None):
        worksheet = sink.workbook[title] if title else sink.workbook.worksheets[-1]
        return [tuple(row) for row in worksheet.iter_rows(values_only=True)]
    return read
