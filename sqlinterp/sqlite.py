import sqlite3
from typing import Optional, Union

SqliteValue = Union[float, int, str, bytes, bytearray, memoryview]


class Quoter:
    """Quotes values as SQLite literals

    With a connection the database's own ``quote()`` function is used,
    otherwise values are escaped with :func:`sqlite_escape`.
    """

    def __init__(self, connection: Optional[sqlite3.Connection] = None) -> None:
        self._connection = connection

    def quote(self, value: object) -> str:
        if self._connection is None:
            return sqlite_escape(value)  # type: ignore[arg-type]
        row = self._connection.execute('SELECT quote(?)', (value,)).fetchone()
        return row[0]  # type: ignore[no-any-return]


def sqlite_escape(val: SqliteValue) -> str:
    tval = type(val)
    if tval is str:
        return "'{}'".format(val.replace("'", "''"))  # type: ignore[union-attr]
    elif tval is int or tval is float:
        return str(val)
    elif tval is bytes or tval is bytearray or tval is memoryview:
        return "X'{}'".format(bytes(val).hex().upper())  # type: ignore[arg-type]
    raise ValueError(f'Invalid type: {val}')
