import pytest

from bulkups.errors import InconsistentShapeError, ShapeError
from bulkups.metadata.dataclass_provider import DataclassMetadata
from bulkups.metadata.sqlalchemy_provider import SQLAlchemyMetadata
from bulkups.services.columns import resolve
from bulkups.services.statement import Statement, build
from tests.models import MenuHours, Store, StoreStatus, Tag

provider = SQLAlchemyMetadata()


def test_statement_text_and_values(fixed_now):
    chunk = [StoreStatus(store_id="s1", status=True), StoreStatus(store_id="s2", status=False)]
    columns, conflict = resolve(chunk[0], (), provider)

    statement = build(chunk, (), columns, conflict, provider)

    assert statement.sql == (
        "INSERT INTO `store_status` (`id`, `status`, `store_id`, `timestamp_utc`) "
        "VALUES (?, ?, ?, ?), (?, ?, ?, ?) "
        "ON DUPLICATE KEY UPDATE `status`=VALUES(`status`)"
    )
    assert statement.values == (None, True, "s1", None, None, False, "s2", None)


def test_placeholder_count_matches_values(fixed_now):
    chunk = [Store(store_id=f"s{i}") for i in range(3)]
    columns, conflict = resolve(chunk[0], ["name"], provider)

    statement = build(chunk, ["name"], columns, conflict, provider)

    assert statement.sql.count("?") == len(chunk) * len(columns) == len(statement.values)


def test_plain_insert_without_conflict_clause():
    chunk = [Tag(name="python", slug="py")]
    columns, conflict = resolve(chunk[0], (), provider)

    statement = build(chunk, (), columns, conflict, provider)

    assert statement.sql == "INSERT INTO `tags` (`name`, `slug`) VALUES (?, ?)"
    assert "ON DUPLICATE KEY UPDATE" not in statement.sql


def test_named_binds_for_execution():
    chunk = [Tag(name="python", slug="py"), Tag(name="go", slug="go")]
    columns, conflict = resolve(chunk[0], (), provider)

    statement = build(chunk, (), columns, conflict, provider)

    assert str(statement.to_text()) == (
        "INSERT INTO `tags` (`name`, `slug`) VALUES (:p0, :p1), (:p2, :p3)"
    )
    assert statement.params() == {"p0": "python", "p1": "py", "p2": "go", "p3": "go"}


def test_schema_qualified_table_is_quoted_per_part():
    statement = Statement(table="shop.tags", columns=("name",), rows=(("a",),))
    assert statement.sql == "INSERT INTO `shop`.`tags` (`name`) VALUES (?)"


def test_empty_chunk_is_a_no_op():
    assert build([], (), ["name"], [], provider) is None


@pytest.mark.parametrize("bad", [42, "store", {"store_id": "s1"}, None])
def test_non_records_are_rejected(bad, fixed_now):
    sample = Store(store_id="s1")
    columns, conflict = resolve(sample, (), provider)

    with pytest.raises(ShapeError):
        build([sample, bad], (), columns, conflict, provider)


def test_mixed_record_types_are_rejected(fixed_now):
    columns, conflict = resolve(Store(), (), provider)

    with pytest.raises(ShapeError):
        build([Store(), StoreStatus()], (), columns, conflict, provider)


def test_inconsistent_attributes_fail_the_chunk(fixed_now):
    # columns resolved without `name`, records still carry it
    columns, conflict = resolve(Store(), ["name"], provider)

    with pytest.raises(InconsistentShapeError) as exc_info:
        build([Store(), Store()], (), columns, conflict, provider)

    assert exc_info.value.index == 0
    assert len(exc_info.value.actual) == len(exc_info.value.expected) + 1


def test_dataclass_records():
    dc = DataclassMetadata()
    chunk = [MenuHours("s1", 0), MenuHours("s1", 1)]
    columns, conflict = resolve(chunk[0], (), dc)

    statement = build(chunk, (), columns, conflict, dc)

    assert statement.sql == (
        "INSERT INTO `menu_hours` (`day_of_week`, `store_id`) VALUES (?, ?), (?, ?) "
        "ON DUPLICATE KEY UPDATE `store_id`=VALUES(`store_id`), `day_of_week`=VALUES(`day_of_week`)"
    )
    assert statement.values == (0, "s1", 1, "s1")
