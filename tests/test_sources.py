"""
Unit tests for record sources.

These tests verify:
1. IterableSource filtering, emptiness checks and generator peeking
2. DataFrameSource batching, NaN normalization and masks
3. SqlAlchemySource against an in-memory SQLite database
"""

from datetime import datetime

import pandas as pd
import pytest
from sqlalchemy import ForeignKey, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, relationship

from recordsheet.exceptions import ExportConfigurationError
from recordsheet.sources import DataFrameSource, IterableSource, RecordSource, as_source
from recordsheet.sources.orm import SqlAlchemySource, mapped_columns


class Base(DeclarativeBase):
    pass


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str]


class Member(Base):
    __tablename__ = "members"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str]
    active: Mapped[bool] = mapped_column(default=True)
    joined_at: Mapped[datetime]
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))
    team: Mapped[Team] = relationship()


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        eng = Team(id=1, name="eng")
        ops = Team(id=2, name="ops")
        session.add_all([
            Member(id=1, name="Alice", active=True, joined_at=datetime(2020, 1, 5, 9, 0), team=eng),
            Member(id=2, name="Bob", active=False, joined_at=datetime(2021, 6, 1, 12, 0), team=eng),
            Member(id=3, name="Carol", active=True, joined_at=datetime(2022, 2, 2, 8, 30), team=ops),
        ])
        session.commit()
        yield session
    engine.dispose()


class TestAsSource:
    """Tests for wrapping datasets."""

    def test_dispatch(self, people):
        assert isinstance(as_source([]), IterableSource)
        assert isinstance(as_source(people), DataFrameSource)
        source = IterableSource([])
        assert as_source(source) is source

    def test_not_iterable(self):
        with pytest.raises(TypeError):
            as_source(42)

    def test_abstract_base(self):
        with pytest.raises(TypeError):
            RecordSource()


class TestIterableSource:
    """Tests for IterableSource."""

    def test_where_equality_and_membership(self, flags):
        source = IterableSource(flags)
        assert [r["id"] for r in source.where(active=1)] == [2]
        assert [r["id"] for r in source.where(id=[1, 2])] == [1, 2]
        assert source.where() is source

    def test_where_on_nested_paths(self, authors):
        source = IterableSource(authors).where(**{"profile.city": "Berlin"})
        assert [a.name for a in source] == ["Alice"]

    def test_list_is_reiterable(self, flags):
        source = IterableSource(flags)
        assert not source.is_empty()
        assert list(source) == list(source) == flags

    def test_generator_peek_keeps_first_record(self, flags):
        """Checking a generator for emptiness does not lose its first record."""
        source = IterableSource(record for record in flags)
        assert not source.is_empty()
        assert source.natural_columns() == ["id", "active"]
        assert list(source) == flags

    def test_empty_generator(self):
        source = IterableSource(iter([]))
        assert source.is_empty()
        assert source.natural_columns() is None

    def test_batches(self):
        batches = list(IterableSource(range(7)).iter_batches(3))
        assert batches == [[0, 1, 2], [3, 4, 5], [6]]

    def test_natural_columns_escape_dots(self):
        source = IterableSource([{"price.usd": 1, "id": 2}])
        assert source.natural_columns() == ["price\\.usd", "id"]

    def test_to_list_materializes(self, flags):
        source = IterableSource(iter(flags)).to_list()
        assert list(source) == list(source) == flags


class TestDataFrameSource:
    """Tests for DataFrameSource."""

    def test_records_normalize_missing_values(self, people):
        records = list(DataFrameSource(people))
        assert records[2]["age"] is None
        assert records[2]["joined"] is None
        assert records[0]["joined"] == pd.Timestamp("2020-01-05 09:15")
        assert records[1]["age"] == 45

    def test_batches_of_500(self):
        frame = pd.DataFrame({"n": range(1200)})
        sizes = [len(batch) for batch in DataFrameSource(frame).iter_batches()]
        assert sizes == [500, 500, 200]

    def test_where(self, people):
        source = DataFrameSource(people)
        assert [r["name"] for r in source.where(dept="eng")] == ["Alice", "Bob"]
        assert [r["name"] for r in source.where(dept=["hr", "sales"])] == ["Charlie", "Diana"]
        assert source.where(dept="legal").is_empty()

    def test_unknown_filter_column_matches_nothing(self, people):
        assert DataFrameSource(people).where(team="eng").is_empty()

    def test_natural_columns(self, people):
        assert DataFrameSource(people).natural_columns() == ["name", "age", "dept", "joined"]

    def test_integer_labels_match_record_keys(self):
        """Record keys are the same strings natural_columns reports."""
        source = DataFrameSource(pd.DataFrame([[1, 2], [3, 4]]))
        assert source.natural_columns() == ["0", "1"]
        assert list(source) == [{"0": 1, "1": 2}, {"0": 3, "1": 4}]
        assert list(source.where(**{"1": 4})) == [{"0": 3, "1": 4}]


class TestSqlAlchemySource:
    """Tests for SqlAlchemySource."""

    def test_iteration(self, session):
        source = SqlAlchemySource(session, Member)
        assert [m.name for m in source] == ["Alice", "Bob", "Carol"]
        assert not source.is_empty()

    def test_where(self, session):
        source = SqlAlchemySource(session, Member)
        assert [m.name for m in source.where(active=False)] == ["Bob"]
        assert [m.name for m in source.where(id=[1, 3])] == ["Alice", "Carol"]
        assert source.where(name="Nobody").is_empty()

    def test_where_unknown_attribute(self, session):
        with pytest.raises(ExportConfigurationError):
            SqlAlchemySource(session, Member).where(nickname="x")

    def test_grouped_query_emptiness(self, session):
        """Grouping is removed before checking for rows."""
        statement = select(Member).join(Member.team).group_by(Member.team_id).order_by(Team.name)
        source = SqlAlchemySource(session, Member, statement)
        assert not source.is_empty()
        assert not source.where(active=False).is_empty()
        assert source.where(name="Nobody").is_empty()

    def test_batches(self, session):
        batches = list(SqlAlchemySource(session, Member).iter_batches(2))
        assert [[m.id for m in batch] for batch in batches] == [[1, 2], [3]]

    def test_natural_columns(self, session):
        expected = ["id", "name", "active", "joined_at", "team_id"]
        assert SqlAlchemySource(session, Member).natural_columns() == expected
        assert mapped_columns(Member) == expected
        assert mapped_columns(object) is None
