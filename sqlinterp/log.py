import logging
import string
from typing import Any, Mapping, Optional

from typing_extensions import Protocol

Context = Mapping[str, Any]


class EventLogger(Protocol):
    def debug(self, message: str, context: Context) -> None: ...

    def info(self, message: str, context: Context) -> None: ...

    def warning(self, message: str, context: Context) -> None: ...

    def error(self, message: str, context: Context) -> None: ...


class NullEventLogger:
    def debug(self, message: str, context: Context) -> None:
        pass

    def info(self, message: str, context: Context) -> None:
        pass

    def warning(self, message: str, context: Context) -> None:
        pass

    def error(self, message: str, context: Context) -> None:
        pass


class _KeepMissing(dict):  # type: ignore[type-arg]
    def __missing__(self, key: str) -> str:
        return '{' + key + '}'


def render(message: str, context: Context) -> str:
    """Substitutes ``{field}`` placeholders, unknown fields are kept as is"""
    try:
        return string.Formatter().vformat(message, (), _KeepMissing(context))
    except (ValueError, IndexError):
        return message


class StdlibEventLogger:
    """Adapts logging.Logger to EventLogger

    Context fields are rendered into the message and also attached to the
    record as ``extra`` attributes (``record.query``, ``record.param``, ...).
    """

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def _log(self, level: int, message: str, context: Context) -> None:
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, '%s', render(message, context), extra=dict(context))

    def debug(self, message: str, context: Context) -> None:
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, context: Context) -> None:
        self._log(logging.INFO, message, context)

    def warning(self, message: str, context: Context) -> None:
        self._log(logging.WARNING, message, context)

    def error(self, message: str, context: Context) -> None:
        self._log(logging.ERROR, message, context)


def make_event_logger(name: Optional[str] = None) -> StdlibEventLogger:
    return StdlibEventLogger(logging.getLogger(name or 'sqlinterp'))
