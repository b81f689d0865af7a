from enum import Enum
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

Key = Union[int, str]
InputParams = Union[Sequence[object], Mapping[str, object]]


class ParamType(Enum):
    STRING = 'string'
    INTEGER = 'integer'
    NULL = 'null'
    BOOL = 'bool'
    LOB = 'lob'


class Ref:
    """Mutable cell for by-reference binding.

    A statement bound with a Ref reads ``ref.value`` when it interpolates or
    executes, so assignments made after binding are visible.
    """

    def __init__(self, value: object = None) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f'Ref({self.value!r})'


def normalize_key(key: Key) -> Key:
    if isinstance(key, str) and not key.startswith(':'):
        return ':' + key
    return key


def infer_type(value: object) -> ParamType:
    if value is None:
        return ParamType.NULL
    elif isinstance(value, bool):
        return ParamType.BOOL
    elif isinstance(value, int):
        return ParamType.INTEGER
    elif isinstance(value, (bytes, bytearray, memoryview)):
        return ParamType.LOB
    return ParamType.STRING


class BoundParameter:
    def __init__(self, key: Key, value: object, datatype: ParamType = ParamType.STRING) -> None:
        self.key = key
        self._value = value
        self.datatype = datatype

    @property
    def value(self) -> object:
        if isinstance(self._value, Ref):
            return self._value.value
        return self._value

    @property
    def marker(self) -> str:
        if isinstance(self.key, int):
            return '?'
        return self.key

    def __repr__(self) -> str:
        return f'BoundParameter({self.key!r}, {self._value!r}, {self.datatype})'


def _sort_key(key: Key) -> Tuple[bool, Key]:
    return isinstance(key, str), key


class ParameterSet(Dict[Key, BoundParameter]):
    """Parameters keyed by 1-based position or by ``:name``"""

    def bind(
        self, key: Key, value: object, datatype: ParamType = ParamType.STRING
    ) -> BoundParameter:
        key = normalize_key(key)
        param = self[key] = BoundParameter(key, value, datatype)
        return param

    def ordered(self) -> Iterator[BoundParameter]:
        for key in sorted(self, key=_sort_key):
            yield self[key]

    @classmethod
    def from_input(cls, params: Optional[InputParams]) -> 'ParameterSet':
        result = cls()
        if not params:
            return result

        if isinstance(params, Mapping):
            for name, value in params.items():
                result.bind(name, value, infer_type(value))
        else:
            for pos, value in enumerate(params, 1):
                result.bind(pos, value, infer_type(value))
        return result
