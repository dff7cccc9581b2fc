"""JSON Aggregation — dialect-aware constructs that fold child rows into JSON arrays.

Invariants:
    - child_array() always yields a JSON array ([] when no child rows, never NULL)
    - Object keys are code-defined identifiers rendered as SQL string literals;
      values are column expressions, so no user input reaches the SQL text
    - PostgreSQL renders json_build_object / json_agg; every other dialect
      (SQLite in tests) renders json_object / json_group_array

Design Decisions:
    - sqlalchemy.ext.compiler over raw text(): statements stay composable with
      the query builder's where/order/limit
    - SQLite drops the JSON subtype across subquery boundaries, so the array is
      re-parsed with json() before it is embedded in an outer object
"""

from typing import Mapping

from sqlalchemy import literal_column, select
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.functions import FunctionElement
from sqlalchemy.types import JSON


class json_object(FunctionElement):
    """Alternating key/value arguments → one JSON object."""
    type = JSON()
    inherit_cache = True
    name = "json_object"


class json_array_agg(FunctionElement):
    """Aggregate a JSON value per row into a JSON array."""
    type = JSON()
    inherit_cache = True
    name = "json_array_agg"


class json_array(FunctionElement):
    """Wrap a scalar subquery returning a JSON array; NULL becomes []."""
    type = JSON()
    inherit_cache = True
    name = "json_array"


@compiles(json_object, "postgresql")
def _pg_json_object(element, compiler, **kw):
    return "json_build_object(%s)" % compiler.process(element.clauses, **kw)


@compiles(json_object)
def _json_object(element, compiler, **kw):
    return "json_object(%s)" % compiler.process(element.clauses, **kw)


@compiles(json_array_agg, "postgresql")
def _pg_json_array_agg(element, compiler, **kw):
    return "json_agg(%s)" % compiler.process(element.clauses, **kw)


@compiles(json_array_agg)
def _json_array_agg(element, compiler, **kw):
    return "json_group_array(%s)" % compiler.process(element.clauses, **kw)


@compiles(json_array, "postgresql")
def _pg_json_array(element, compiler, **kw):
    return "coalesce(%s, '[]'::json)" % compiler.process(element.clauses, **kw)


@compiles(json_array)
def _json_array(element, compiler, **kw):
    return "json(coalesce(%s, '[]'))" % compiler.process(element.clauses, **kw)


def object_of(fields: Mapping[str, ColumnElement]) -> json_object:
    """Build a json_object from an ordered key → column mapping."""
    args = []
    for key, value in fields.items():
        if not key.isidentifier():
            raise ValueError(f"JSON key must be an identifier: {key!r}")
        args.append(literal_column(f"'{key}'"))
        args.append(value)
    return json_object(*args)


def child_array(
    fields: Mapping[str, ColumnElement], *where: ColumnElement, select_from=None,
) -> json_array:
    """Correlated subquery aggregating matching child rows into a JSON array."""
    stmt = select(json_array_agg(object_of(fields)))
    if select_from is not None:
        stmt = stmt.select_from(select_from)
    return json_array(stmt.where(*where).scalar_subquery())
