from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from typing_extensions import Protocol

from .dialect import Quoter, prepare_value
from .log import EventLogger, NullEventLogger
from .markers import substitute
from .params import (
    BoundParameter,
    InputParams,
    Key,
    ParameterSet,
    ParamType,
    Ref,
    normalize_key,
)

DBParams = Union[List[object], Dict[str, object]]


class RealStatement(Protocol):
    query: str

    def bind(
        self, key: Key, value: object, datatype: ParamType, length: Optional[int] = None
    ) -> None: ...

    def execute(self, params: Optional[InputParams] = None) -> Any: ...


def coerce(value: object, datatype: ParamType) -> object:
    if value is None or datatype is ParamType.NULL:
        return None
    elif datatype is ParamType.INTEGER:
        return int(value)  # type: ignore[call-overload]
    elif datatype is ParamType.BOOL:
        return int(bool(value))
    elif datatype is ParamType.STRING and not isinstance(value, str):
        return str(value)
    return value


class CursorStatement:
    """RealStatement on top of a DB-API cursor with qmark or named paramstyle"""

    def __init__(self, cursor: Any, query: str) -> None:
        self.cursor = cursor
        self.query = query
        self._binds = ParameterSet()

    def bind(
        self, key: Key, value: object, datatype: ParamType, length: Optional[int] = None
    ) -> None:
        self._binds.bind(key, value, datatype)

    def db_params(self) -> DBParams:
        ordered = list(self._binds.ordered())
        if ordered and isinstance(ordered[0].key, str):
            return {it.key[1:]: coerce(it.value, it.datatype) for it in ordered}  # type: ignore[index]
        return [coerce(it.value, it.datatype) for it in ordered]

    def execute(self, params: Optional[InputParams] = None) -> Any:
        if params is None:
            dbparams: Union[DBParams, InputParams] = self.db_params()
        elif isinstance(params, Mapping):
            dbparams = {str(normalize_key(k))[1:]: v for k, v in params.items()}
        else:
            dbparams = params
        return self.cursor.execute(self.query, dbparams)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        return getattr(self.cursor, name)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.cursor)


class Statement:
    """Prepared statement wrapper which renders bound values into the query

    Execution still goes through the wrapped statement with parameter binding,
    the interpolated query is only reported to the logger and kept in
    :attr:`full_query` for debugging. Values are rendered with the given
    quoter, or with backslash escaping and a warning when there is none.
    """

    def __init__(
        self,
        real: RealStatement,
        quoter: Optional[Quoter] = None,
        logger: Optional[EventLogger] = None,
    ) -> None:
        self._real = real
        self._quoter = quoter
        self._logger: EventLogger = logger if logger is not None else NullEventLogger()
        self._params = ParameterSet()
        self._full_query: Optional[str] = None

    @property
    def query(self) -> str:
        return self._real.query

    @property
    def full_query(self) -> Optional[str]:
        return self._full_query

    @property
    def params(self) -> ParameterSet:
        return self._params

    def bind_param(
        self,
        key: Key,
        ref: Ref,
        datatype: ParamType = ParamType.STRING,
        length: Optional[int] = None,
    ) -> None:
        if not isinstance(ref, Ref):
            ref = Ref(ref)
        param = self._params.bind(key, ref, datatype)
        self._log_bind(param)
        self._real.bind(key, ref, datatype, length)

    def bind_value(self, key: Key, value: object, datatype: ParamType = ParamType.STRING) -> None:
        param = self._params.bind(key, value, datatype)
        self._log_bind(param)
        self._real.bind(key, value, datatype)

    def _log_bind(self, param: BoundParameter) -> None:
        self._logger.debug(
            'Binding {param} as {datatype}: {value}',
            {'param': param.key, 'datatype': param.datatype.name, 'value': param.value},
        )

    def _prepare(self, param: BoundParameter) -> str:
        value = param.value
        if self._quoter is None and value is not None and param.datatype is not ParamType.NULL:
            self._logger.warning(
                'No quoter available, falling back to unsafe escaping for {param}',
                {'param': param.key},
            )
        return prepare_value(value, param.datatype, self._quoter)

    def _prepared(self, params: ParameterSet) -> Iterator[Tuple[BoundParameter, str]]:
        for it in params.ordered():
            yield it, self._prepare(it)

    def interpolate(self, params: Optional[InputParams] = None) -> str:
        effective = self._params or ParameterSet.from_input(params)
        self._full_query = substitute(self.query, self._prepared(effective))
        return self._full_query

    def execute(self, params: Optional[InputParams] = None) -> Any:
        query = self.interpolate(params)
        try:
            result = self._real.execute(params)
        except Exception as e:
            self._logger.error(
                'Query failed: {query} ({exception})', {'query': query, 'exception': e}
            )
            raise

        self._logger.info('Query executed: {query}', {'query': query})
        return result

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        return getattr(self._real, name)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._real)  # type: ignore[call-overload]
