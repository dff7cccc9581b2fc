"""Query Builder — shared WHERE, allow-listed ORDER BY, bound parameters.

Tests:
    - Row and count statements carry the same predicate
    - Absent filters add nothing
    - Unknown sort names fall back to the default column
    - User values only ever appear as bound parameters
"""

from sqlalchemy.dialects import sqlite

from wildwatch.core.domain_types import SortOrder
from wildwatch.core.pagination import ListParams
from wildwatch.core.query_builder import (
    build_list_query, combine_conditions, escape_like, resolve_sort_column,
)
from wildwatch.models.device import Device
from wildwatch.services.devices import DeviceFilters, SORT_COLUMNS, device_conditions
from wildwatch.services.events import EventFilters, event_conditions


def _compile(stmt):
    return stmt.compile(dialect=sqlite.dialect())


def _device_query(filters: DeviceFilters, params: ListParams):
    return build_list_query(
        (Device.id, Device.name), Device, device_conditions(filters),
        params, SORT_COLUMNS, "createdAt", tiebreaker=Device.id,
    )


def test_combine_conditions_skips_absent():
    assert combine_conditions([]) is None
    assert combine_conditions([None, None]) is None
    only = Device.id == 1
    assert combine_conditions([None, only]) is only


def test_no_filters_means_no_where():
    query = _device_query(DeviceFilters(), ListParams())
    assert "WHERE" not in str(_compile(query.rows))
    assert "WHERE" not in str(_compile(query.count))


def test_rows_and_count_share_predicate():
    query = _device_query(DeviceFilters(owner_id="u1", type_id=3), ListParams())
    rows_sql = str(_compile(query.rows))
    count_sql = str(_compile(query.count))
    rows_where = rows_sql.split("WHERE", 1)[1].split("ORDER BY")[0].strip()
    count_where = count_sql.split("WHERE", 1)[1].strip()
    assert rows_where == count_where
    assert "count(*)" in count_sql


def test_user_values_are_bound():
    hostile = "x'; DROP TABLE devices; --"
    compiled = _compile(
        _device_query(DeviceFilters(owner_id=hostile), ListParams()).rows,
    )
    assert "DROP TABLE" not in str(compiled)
    assert hostile in compiled.params.values()


def test_limit_and_offset_are_bound():
    compiled = _compile(_device_query(DeviceFilters(), ListParams(page=3, limit=10)).rows)
    assert 10 in compiled.params.values()
    assert 20 in compiled.params.values()


def test_sort_direction_and_tiebreaker():
    sql = str(_compile(_device_query(
        DeviceFilters(), ListParams(sort_by="name", order=SortOrder.ASC),
    ).rows))
    assert "ORDER BY devices.name ASC, devices.id ASC" in sql


def test_unknown_sort_falls_back_to_default():
    column = resolve_sort_column("password", SORT_COLUMNS, "createdAt")
    assert column is SORT_COLUMNS["createdAt"]
    assert resolve_sort_column(None, SORT_COLUMNS, "name") is SORT_COLUMNS["name"]


def test_tiebreaker_not_duplicated_when_sorting_by_it():
    sql = str(_compile(_device_query(DeviceFilters(), ListParams(sort_by="id")).rows))
    assert sql.count("devices.id DESC") == 1


def test_escape_like():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


def test_event_filters_map_to_conditions():
    assert event_conditions(EventFilters()) == []
    assert len(event_conditions(EventFilters(device_id=1, device_name="ignored"))) == 1
    assert len(event_conditions(EventFilters(has_media=True))) == 1
    assert len(event_conditions(EventFilters(has_media=False))) == 2
