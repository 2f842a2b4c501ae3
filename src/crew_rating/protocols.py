"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces the crew rating host depends on,
enabling isolated unit testing with in-memory implementations.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem for reading crew records and writing score results."""

    def read_json(self, path: Path) -> dict[str, object]:
        """Read JSON file."""
        ...

    def write_json(self, data: Mapping[str, object], path: Path) -> None:
        """Write JSON file."""
        ...

    def read_text(self, path: Path) -> str:
        """Read text file."""
        ...

    def write_text(self, content: str, path: Path) -> None:
        """Write text file."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        ...

    def mkdir(self, path: Path, parents: bool = True) -> None:
        """Create directory."""
        ...
