import sqlite3
from typing import Optional

from typing_extensions import assert_type

from . import ParameterSet, ParamType, Ref, Statement, prepare
from .log import EventLogger, NullEventLogger, make_event_logger
from .sqlite import Quoter


def test_interpolate_returns_str() -> None:
    stmt = prepare(sqlite3.connect(':memory:'), 'SELECT ?')
    assert_type(stmt, Statement)
    assert_type(stmt.interpolate([1]), str)
    assert_type(stmt.full_query, Optional[str])


def test_collaborators_match_protocols() -> None:
    conn = sqlite3.connect(':memory:')
    logger: EventLogger = make_event_logger()
    _ = prepare(conn, 'SELECT 1', quoter=Quoter(conn), logger=logger)
    _ = prepare(conn, 'SELECT 1', logger=NullEventLogger())


def test_bind_param_should_require_ref() -> None:
    stmt = prepare(sqlite3.connect(':memory:'), 'SELECT :id')
    stmt.bind_param(':id', Ref(10), ParamType.INTEGER)
    stmt.bind_param(':id', 10, ParamType.INTEGER)  # type: ignore[arg-type]


def test_from_input_type() -> None:
    assert_type(ParameterSet.from_input({'id': 1}), ParameterSet)
