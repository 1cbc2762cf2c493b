"""API routes package."""

from . import export
from . import merge
from . import roster
from . import topics

__all__ = ["roster", "topics", "merge", "export"]
