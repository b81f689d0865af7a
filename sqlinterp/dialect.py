from typing import Optional

from typing_extensions import Protocol

from .params import ParamType

NULL = 'NULL'
FALLBACK_ESCAPE = {
    '\\': '\\\\',
    "'": "\\'",
    '"': '\\"',
    '\0': '\\0',
}
BYTES_TYPES = (bytes, bytearray, memoryview)


class Quoter(Protocol):
    def quote(self, value: object) -> str: ...


def fallback_quote(value: object) -> str:
    r"""Quotes value as a string literal with backslash escapes

    It mirrors PHP's addslashes and knows nothing about encodings or
    driver specific rules. Output is good enough to eyeball a query in logs
    but must never be executed with untrusted values.

    >>> fallback_quote("O'Brien")
    "'O\\'Brien'"
    """
    if isinstance(value, BYTES_TYPES):
        text = bytes(value).decode('utf-8', 'replace')
    else:
        text = str(value)
    return "'{}'".format(''.join(FALLBACK_ESCAPE.get(c, c) for c in text))


def _quote(value: object, quoter: Quoter) -> str:
    # values rejected by the quoter are rendered with fallback_quote
    try:
        return quoter.quote(value)
    except Exception:
        return fallback_quote(value)


def prepare_value(value: object, datatype: ParamType, quoter: Optional[Quoter]) -> str:
    if value is None or datatype is ParamType.NULL:
        return NULL

    if quoter is None:
        return fallback_quote(value)

    if datatype is ParamType.INTEGER or datatype is ParamType.BOOL:
        try:
            return str(int(value))  # type: ignore[call-overload]
        except (TypeError, ValueError, OverflowError):
            return _quote(value, quoter)

    if datatype is ParamType.STRING and not isinstance(value, (str, bytes)):
        value = str(value)
    return _quote(value, quoter)
