# SPDX-License-Identifier: MIT
"""Platform description for targets and specification consumers."""

from __future__ import annotations

from dataclasses import dataclass

# Platform symbol -> display name
PLATFORM_NAMES = {
    "ios": "iOS",
    "osx": "macOS",
    "tvos": "tvOS",
    "watchos": "watchOS",
}

# Minimum deployment target that supports embedded dynamic frameworks
_DYNAMIC_FRAMEWORKS_MINIMUM = {
    "ios": (8, 0),
    "watchos": (2, 0),
}


def _version_tuple(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in version.split(".") if part.isdigit())


@dataclass(frozen=True)
class Platform:
    """A target platform with an optional deployment target.

    Attributes:
        name: Platform symbol ("ios", "osx", "tvos" or "watchos").
        deployment_target: Minimum OS version, e.g. "12.0".
    """

    name: str
    deployment_target: str | None = None

    def __post_init__(self) -> None:
        if self.name not in PLATFORM_NAMES:
            raise ValueError(
                f"Unknown platform {self.name!r}, expected one of "
                f"{', '.join(sorted(PLATFORM_NAMES))}"
            )

    @property
    def string_name(self) -> str:
        return PLATFORM_NAMES[self.name]

    @property
    def supports_dynamic_frameworks(self) -> bool:
        """Whether binaries for this platform can embed dynamic frameworks."""
        minimum = _DYNAMIC_FRAMEWORKS_MINIMUM.get(self.name)
        if minimum is None or self.deployment_target is None:
            return True
        return _version_tuple(self.deployment_target) >= minimum

    def __str__(self) -> str:
        if self.deployment_target:
            return f"{self.string_name} {self.deployment_target}"
        return self.string_name
