"""I/O errors that remember which file they failed on.

``OSError`` raised by most file functions only sometimes carries the file
name, and never when the failing call works on an already opened handle.
The wrappers here run a single-path operation and, if it raises ``OSError``,
re-raise it as :class:`PathIOError` with the path attached.

Usage:
    text = wrap_sync("my_file.txt", Path.read_text)
    handle = wrap_sync(config_path, open)
    data = await wrap_async(path, read_bytes_async)
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Awaitable, Callable, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")
PathArg = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]

_MESSAGE_TEMPLATE = "Operating on file '{path}' failed with error {error}"


class PathIOError(OSError):
    """An ``OSError`` together with the file path the operation failed on.

    Attributes:
        source: The original error raised by the operation.
        file: Text of the path argument exactly as passed, taken before the
            operation ran. Bytes paths are decoded with surrogateescape.
    """

    def __init__(self, source: OSError, file: PathArg) -> None:
        self.source = source
        self.file = owned_path(file)
        super().__init__(str(self))
        self.errno = source.errno
        self.strerror = source.strerror
        self.filename = self.file
        self.__cause__ = source

    @classmethod
    def from_os_error(cls, err: OSError, path: PathArg) -> PathIOError:
        """Tag ``err`` with a path that is known out of band."""
        return cls(err, path)

    @property
    def path(self) -> Path:
        return Path(self.file)

    def __reduce__(self):
        return type(self), (self.source, self.file)

    def __str__(self) -> str:
        return _MESSAGE_TEMPLATE.format(path=lossy_path(self.file), error=self.source)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self.source!r}, file={self.file!r})"


def owned_path(path: PathArg) -> str:
    """Return the text of ``path`` without normalizing it.

    Bytes are decoded with the filesystem encoding (surrogateescape), so
    undecodable bytes round-trip through ``os.fsencode``.
    """
    return os.fsdecode(os.fspath(path))


def lossy_path(path: PathArg) -> str:
    """Render ``path`` as printable text, replacing undecodable parts."""
    raw = os.fspath(path)
    if isinstance(raw, str):
        if not _has_surrogates(raw):
            return raw
        try:
            raw = os.fsencode(raw)
        except UnicodeEncodeError:
            # Lone surrogates outside the surrogateescape range
            return raw.encode("utf-8", "surrogatepass").decode("utf-8", "replace")
    return raw.decode(sys.getfilesystemencoding(), "replace")


def _has_surrogates(text: str) -> bool:
    return any("\ud800" <= char <= "\udfff" for char in text)


def wrap_sync(path: PathArg, operation: Callable[[PathArg], T]) -> T:
    """Run ``operation(path)`` and tag any ``OSError`` with ``path``.

    Args:
        path: Path-like value handed to the operation unchanged
        operation: Callable taking the path, e.g. ``open`` or ``Path.read_text``

    Returns:
        Whatever the operation returns

    Raises:
        PathIOError: The operation raised ``OSError``
    """
    file = owned_path(path)
    try:
        return operation(path)
    except OSError as exc:
        logger.debug("I/O operation on %s failed: %s", lossy_path(file), exc)
        raise PathIOError(exc, file) from exc


async def wrap_async(path: PathArg, operation: Callable[[PathArg], Awaitable[T]]) -> T:
    """Await ``operation(path)`` and tag any ``OSError`` with ``path``.

    Same contract as :func:`wrap_sync`. The awaitable is awaited once in the
    caller's task; nothing is scheduled concurrently.
    """
    file = owned_path(path)
    try:
        return await operation(path)
    except OSError as exc:
        logger.debug("Async I/O operation on %s failed: %s", lossy_path(file), exc)
        raise PathIOError(exc, file) from exc
