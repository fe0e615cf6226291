# SPDX-License-Identifier: MIT
"""Pod specifications and their platform-bound consumers.

A Specification is the already-parsed description of a pod (or one of its
subspecs). Parsing podspec files is not done here; callers hand in the
attributes they already have.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from podagg.core.platform import Platform

# Attributes that a Consumer merges from generic and platform-specific values
LIST_ATTRIBUTES = ("frameworks", "weak_frameworks", "libraries", "compiler_flags")


@dataclass
class Specification:
    """A parsed pod specification.

    Attributes:
        name: Full name, e.g. "Alamofire" or "Firebase/Core".
        version: Version string.
        attributes: Platform independent attributes.
        platform_attributes: Attributes keyed by platform symbol.
    """

    name: str
    version: str = "0.0.0"
    attributes: dict[str, Any] = field(default_factory=dict)
    platform_attributes: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def root_name(self) -> str:
        """Name of the root specification ("Firebase" for "Firebase/Core")."""
        return self.name.split("/", 1)[0]

    def consumer(self, platform: Platform) -> Consumer:
        return Consumer(self, platform)

    def __str__(self) -> str:
        return f"{self.name} ({self.version})"


class Consumer:
    """A specification seen through a single platform.

    List attributes are the generic values followed by the values declared
    for the consumer's platform, without duplicates.
    """

    def __init__(self, spec: Specification, platform: Platform) -> None:
        self.spec = spec
        self.platform = platform

    def _list_attribute(self, name: str) -> list[str]:
        values: list[str] = []
        specific = self.spec.platform_attributes.get(self.platform.name, {})
        for source in (self.spec.attributes, specific):
            for value in source.get(name, []):
                if value not in values:
                    values.append(value)
        return values

    @property
    def frameworks(self) -> list[str]:
        return self._list_attribute("frameworks")

    @property
    def weak_frameworks(self) -> list[str]:
        return self._list_attribute("weak_frameworks")

    @property
    def libraries(self) -> list[str]:
        return self._list_attribute("libraries")

    @property
    def compiler_flags(self) -> list[str]:
        return self._list_attribute("compiler_flags")

    def __repr__(self) -> str:
        return f"Consumer({self.spec.name!r}, {self.platform.name!r})"
