"""Human readable errors for file I/O and program entry points."""

from .errors import ProgramError, entry_point, iter_causes, render_chain
from .path_io import PathIOError, lossy_path, wrap_async, wrap_sync

__version__ = "0.1.0"

__all__ = [
    "PathIOError",
    "ProgramError",
    "entry_point",
    "iter_causes",
    "lossy_path",
    "render_chain",
    "wrap_async",
    "wrap_sync",
]
