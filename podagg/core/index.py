# SPDX-License-Identifier: MIT
"""Pod targets of an aggregate target, partitioned by build configuration."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from podagg.core.platform import Platform
    from podagg.core.pod_target import PodTarget
    from podagg.core.specification import Consumer, Specification


class DependencyIndex:
    """Pod targets per build configuration, with flattened views.

    Flattening keeps the first occurrence of each pod target, walking the
    configurations in insertion order. Pod targets are compared as
    objects, never by name.

    Example:
        index = DependencyIndex({"Debug": [a, b], "Release": [b, c]})
        index.pod_targets                  # [a, b, c]
        index.for_configuration("Beta")    # []
    """

    def __init__(self, pod_targets_by_configuration: Mapping[str, Sequence[PodTarget]]) -> None:
        self._by_configuration = {
            configuration: list(pod_targets)
            for configuration, pod_targets in pod_targets_by_configuration.items()
        }
        self._pod_targets = list(
            dict.fromkeys(
                pod_target
                for pod_targets in self._by_configuration.values()
                for pod_target in pod_targets
            )
        )

    @property
    def configurations(self) -> list[str]:
        return list(self._by_configuration)

    @property
    def pod_targets(self) -> list[PodTarget]:
        return list(self._pod_targets)

    def for_configuration(self, configuration: str) -> list[PodTarget]:
        """Pod targets used by a configuration; empty when it is unknown."""
        return list(self._by_configuration.get(configuration, []))

    def specs(self) -> list[Specification]:
        return [spec for pod_target in self._pod_targets for spec in pod_target.specs]

    def specs_by_configuration(
        self, configurations: Iterable[str]
    ) -> dict[str, list[Specification]]:
        return {
            configuration: [
                spec
                for pod_target in self.for_configuration(configuration)
                for spec in pod_target.specs
            ]
            for configuration in configurations
        }

    def spec_consumers(self, platform: Platform) -> list[Consumer]:
        return [spec.consumer(platform) for spec in self.specs()]

    def __len__(self) -> int:
        return len(self._pod_targets)

    def __repr__(self) -> str:
        counts = ", ".join(f"{c}={len(p)}" for c, p in self._by_configuration.items())
        return f"DependencyIndex({counts})"
