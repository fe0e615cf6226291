# SPDX-License-Identifier: MIT
"""Generator protocol for support file generation.

Generators take a configured AggregateTarget and write the support
files the user project consumes (xcconfigs, scripts, ...). They are the
only part of podagg that touches the filesystem.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from podagg.core.aggregate_target import AggregateTarget


@runtime_checkable
class Generator(Protocol):
    """Protocol for support file generators."""

    @property
    def name(self) -> str:
        """Generator name (e.g., 'xcconfig')."""
        ...

    def generate(
        self, target: AggregateTarget, output_dir: Path | None = None
    ) -> list[Path]:
        """Generate support files for an aggregate target.

        Args:
            target: The aggregate target to generate for.
            output_dir: Directory to write to, instead of the target's
                support files directory.

        Returns:
            Paths of the files written.
        """
        ...


class BaseGenerator:
    """Base class for generators with common functionality."""

    def __init__(self, name: str) -> None:
        """Initialize a generator.

        Args:
            name: Generator name.
        """
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def generate(
        self, target: AggregateTarget, output_dir: Path | None = None
    ) -> list[Path]:
        """Generate support files. Subclasses must implement."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
