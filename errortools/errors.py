"""Top-level error reporting with the full chain of causes."""

from __future__ import annotations

import functools
import logging
import sys
from typing import Callable, Iterator, Optional, Union

logger = logging.getLogger(__name__)

CAUSE_PREFIX = "caused by: "


class ProgramError(Exception):
    """Wrapper for whatever error ended a program's ``main``.

    ``str()`` of the wrapper lists the wrapped error and every error that
    caused it, one per line, so the final report is readable without the
    traceback.
    """

    exit_code: int = 1

    def __init__(self, error: BaseException) -> None:
        super().__init__(error)
        self.error = error

    @classmethod
    def lift(cls, value: Union[BaseException, str, ProgramError]) -> ProgramError:
        """Convert an exception (or a bare message) into a ``ProgramError``."""
        if isinstance(value, ProgramError):
            return value
        if isinstance(value, BaseException):
            return cls(value)
        if isinstance(value, str):
            return cls(Exception(value))
        raise TypeError(f"Cannot convert {type(value).__name__} into {cls.__name__}")

    def render(self) -> str:
        return render_chain(self.error)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.error!r})"


def next_cause(error: BaseException) -> Optional[BaseException]:
    """Return the error that led to ``error``, if any.

    An explicit ``raise ... from`` cause wins; otherwise the implicit context
    is used unless it was suppressed with ``from None``.
    """
    if error.__cause__ is not None:
        return error.__cause__
    if error.__suppress_context__:
        return None
    return error.__context__


def iter_causes(error: BaseException) -> Iterator[BaseException]:
    """Yield ``error`` followed by each underlying cause.

    Stops at the first error already yielded, so a cyclic chain terminates.
    """
    seen: set[int] = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = next_cause(current)


def render_chain(error: BaseException) -> str:
    """Render ``error`` and its causes, one ``caused by:`` line per cause."""
    causes = iter_causes(error)
    lines = [str(next(causes))]
    lines.extend(f"{CAUSE_PREFIX}{cause}" for cause in causes)
    return "\n".join(lines)


def entry_point(func: Callable[..., Optional[int]]) -> Callable[..., int]:
    """Turn a ``main`` function into one that reports errors and returns an exit code.

    Usage:
        @entry_point
        def main() -> None:
            config = wrap_sync("settings.json", Path.read_text)
            ...

        if __name__ == "__main__":
            sys.exit(main())
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> int:
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            error = ProgramError.lift(exc)
            logger.debug("%s failed with %s", func.__qualname__, type(error.error).__name__)
            print(error.render(), file=sys.stderr)
            return error.exit_code
        return 0 if result is None else result

    return wrapper
