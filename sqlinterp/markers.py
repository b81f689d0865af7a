import re
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .params import BoundParameter

Part = Union[str, 'Marker']

# Literals and comments are matched first so markers inside them are skipped.
# Quotes are escaped by doubling them, as in SQLite and standard SQL. Best
# effort only: backslash escapes (MySQL), dollar quoting and unterminated
# literals are not recognized.
TOKEN_RE = re.compile(
    r"""
    '(?:[^']|'')*'
    | "(?:[^"]|"")*"
    | --[^\n]*
    | /\*.*?\*/
    | (?P<qmark>\?)(?!\w)
    | (?<![:\w])(?P<named>:[A-Za-z_]\w*)
    """,
    re.VERBOSE | re.DOTALL,
)


class Marker:
    def __init__(self, text: str) -> None:
        self.text = text
        self.replacement: Optional[str] = None

    def __str__(self) -> str:
        if self.replacement is None:
            return self.text
        return self.replacement

    def __repr__(self) -> str:
        return f'Marker({self.text!r})'


def split_markers(query: str) -> List[Part]:
    r"""Splits query into literal text and placeholder markers

    >>> split_markers("SELECT ':skip', :id, ?")
    ["SELECT ':skip', ", Marker(':id'), ', ', Marker('?')]
    """
    parts: List[Part] = []
    pos = 0
    for m in TOKEN_RE.finditer(query):
        text = m.group('qmark') or m.group('named')
        if not text:
            continue
        if m.start() > pos:
            parts.append(query[pos : m.start()])
        parts.append(Marker(text))
        pos = m.end()

    if pos < len(query):
        parts.append(query[pos:])
    return parts


def iter_markers(parts: Iterable[Part]) -> Iterator[Marker]:
    for it in parts:
        if isinstance(it, Marker):
            yield it


def replace_marker(parts: List[Part], marker: str, value: str) -> bool:
    """Replaces the first unconsumed marker with a given text

    Returns False when there is no such marker left.
    """
    for it in iter_markers(parts):
        if it.replacement is None and it.text == marker:
            it.replacement = value
            return True
    return False


def substitute(query: str, params: Iterable[Tuple[BoundParameter, str]]) -> str:
    """Substitutes prepared values into query markers

    params are (parameter, prepared value) pairs in processing order.
    Replaced text is never rescanned, so a value containing ``?`` or
    ``:name`` could not be consumed by a following parameter.
    """
    parts = split_markers(query)
    for param, value in params:
        replace_marker(parts, param.marker, value)
    return ''.join(map(str, parts))
