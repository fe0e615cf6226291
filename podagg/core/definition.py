# SPDX-License-Identifier: MIT
"""Podfile and target definitions.

These are the already-evaluated declarations an aggregate target is built
from. Only the parts the aggregation needs are modelled.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Default mapping of build configuration name -> build type
DEFAULT_BUILD_CONFIGURATIONS = {"Debug": "debug", "Release": "release"}

BUILD_TYPES = ("debug", "release")


@dataclass
class Podfile:
    """The file that declared the target definitions.

    Attributes:
        defined_in_file: Path of the Podfile, or None when the Podfile was
            synthesized in memory.
        generate_bridge_support: Whether BridgeSupport metadata is generated.
    """

    defined_in_file: Path | None = None
    generate_bridge_support: bool = False


class TargetDefinition:
    """A `target` block of a Podfile.

    Attributes:
        name: Name of the block (usually the user target name).
        podfile: The Podfile this definition belongs to.
        abstract: Abstract definitions only group other definitions and
            never produce an aggregate target.
        parent: Enclosing definition, if any.
        build_configurations: Build configuration name -> build type.
    """

    def __init__(
        self,
        name: str,
        podfile: Podfile | None = None,
        *,
        abstract: bool = False,
        parent: TargetDefinition | None = None,
        build_configurations: dict[str, str] | None = None,
    ) -> None:
        self.name = name
        self.podfile = podfile if podfile is not None else Podfile()
        self.abstract = abstract
        self.parent = parent
        self.build_configurations = dict(
            build_configurations or DEFAULT_BUILD_CONFIGURATIONS
        )
        for configuration, build_type in self.build_configurations.items():
            if build_type not in BUILD_TYPES:
                raise ValueError(
                    f"Build configuration {configuration!r} has unknown type "
                    f"{build_type!r}, expected one of {BUILD_TYPES}"
                )

    @property
    def root(self) -> bool:
        return self.parent is None

    @property
    def label(self) -> str:
        """The label used to name the aggregate target.

        The root definition is "Pods"; children of the root (or of an
        abstract parent) are "Pods-<name>"; children of a concrete parent
        extend the parent's label.
        """
        if self.root and self.name == "Pods":
            return "Pods"
        if self.parent is not None and not self.parent.abstract and not self.parent.root:
            return f"{self.parent.label}-{self.name}"
        return f"Pods-{self.name}"

    def __repr__(self) -> str:
        return f"TargetDefinition({self.label!r})"
