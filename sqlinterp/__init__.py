from typing import Any, Optional

from .dialect import Quoter
from .log import EventLogger
from .params import ParameterSet, ParamType, Ref
from .statement import CursorStatement, Statement

version = '0.1'

__all__ = [
    'CursorStatement',
    'ParamType',
    'ParameterSet',
    'Ref',
    'Statement',
    'prepare',
]


def prepare(
    connection: Any,
    query: str,
    quoter: Optional[Quoter] = None,
    logger: Optional[EventLogger] = None,
) -> Statement:
    """Prepares interpolating statement on a DB-API connection cursor"""
    return Statement(CursorStatement(connection.cursor(), query), quoter, logger)
