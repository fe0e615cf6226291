# SPDX-License-Identifier: MIT
"""Build settings of aggregate targets.

Three pieces live here:

- Xcconfig: an ordered map of build settings that renders to the
  `.xcconfig` text format.
- SettingsCache: per-configuration settings objects, built on first
  access and kept for the lifetime of the target.
- AggregateTargetSettings: the settings a user target gets from its
  aggregate target for one build configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

from podagg.core.errors import ConfigurationNotFoundError, NoBuildSettingsError
from podagg.core.paths import (
    BUILD_DIR,
    CONFIGURATION,
    EFFECTIVE_PLATFORM_NAME,
    PODS_BUILD_DIR,
    PODS_ROOT,
    VariablePath,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from podagg.core.aggregate_target import AggregateTarget
    from podagg.core.pod_target import PodTarget

INHERITED = "$(inherited)"


@dataclass
class Xcconfig:
    """An xcconfig file's build settings.

    Attributes:
        attributes: Build setting name -> value, in insertion order.
    """

    attributes: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, key: str) -> str:
        return self.attributes[key]

    def __contains__(self, key: object) -> bool:
        return key in self.attributes

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.attributes.get(key, default)

    def merge(self, other: Xcconfig | Mapping[str, str]) -> Xcconfig:
        """Merge another xcconfig into this one (in place).

        Values of keys present in both are concatenated, skipping words
        that are already present.
        """
        items = other.attributes if isinstance(other, Xcconfig) else other
        for key, value in items.items():
            existing = self.attributes.get(key)
            if existing is None:
                self.attributes[key] = value
                continue
            words = existing.split()
            for word in value.split():
                if word not in words:
                    words.append(word)
            self.attributes[key] = " ".join(words)
        return self

    def to_string(self) -> str:
        lines = [f"{key} = {self.attributes[key]}" for key in sorted(self.attributes)]
        return "\n".join(lines) + "\n"

    @classmethod
    def from_string(cls, text: str) -> Xcconfig:
        """Parse xcconfig text. Comments and #include lines are ignored."""
        attributes: dict[str, str] = {}
        for line in text.splitlines():
            line = line.split("//", 1)[0].strip()
            if not line or line.startswith("#include"):
                continue
            key, sep, value = line.partition("=")
            if sep:
                attributes[key.strip()] = value.strip()
        return cls(attributes)


class SettingsCache:
    """Per-configuration build settings, computed once each.

    Only configurations passed at construction are known. An entry is
    created by `factory` the first time it is requested and is never
    recomputed or evicted.

    Attributes:
        owner: The target the settings belong to (used in error messages).
    """

    def __init__(
        self,
        owner: Any,
        configuration_names: Iterable[str],
        factory: Callable[[str], Any],
    ) -> None:
        self.owner = owner
        self._configuration_names = list(configuration_names)
        self._factory = factory
        self._settings: dict[str, Any] = {}

    @property
    def configuration_names(self) -> list[str]:
        return list(self._configuration_names)

    def get(self, configuration_name: str) -> Any:
        """Return the settings of a known configuration.

        Raises:
            ConfigurationNotFoundError: If the configuration is unknown.
        """
        if configuration_name not in self._configuration_names:
            raise ConfigurationNotFoundError(
                self.owner, configuration_name, self._configuration_names
            )
        settings = self._settings.get(configuration_name)
        if settings is None:
            logger.debug("Creating %s build settings for %s", configuration_name, self.owner)
            settings = self._factory(configuration_name)
            self._settings[configuration_name] = settings
        return settings

    def first(self) -> Any:
        """Return the settings of the first configuration.

        Raises:
            NoBuildSettingsError: If there are no configurations.
        """
        if not self._configuration_names:
            raise NoBuildSettingsError(self.owner)
        return self.get(self._configuration_names[0])

    def __contains__(self, configuration_name: object) -> bool:
        return configuration_name in self._configuration_names

    def __len__(self) -> int:
        return len(self._configuration_names)

    def __repr__(self) -> str:
        return f"SettingsCache({self.owner}, {self._configuration_names!r})"


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _quoted_list(values: Iterable[str]) -> str:
    return " ".join([INHERITED, *(f'"{value}"' for value in values)])


class AggregateTargetSettings:
    """Build settings an aggregate target provides for one configuration.

    Pods of the target's configuration are searched and linked. Pods of
    its search-paths aggregate targets are only searched. Each value is
    computed on first access.

    Attributes:
        target: The aggregate target.
        configuration_name: Build configuration these settings are for.
    """

    def __init__(self, target: AggregateTarget, configuration_name: str) -> None:
        self.target = target
        self.configuration_name = configuration_name
        self._memo: dict[str, Any] = {}

    def _memoized(self, key: str, compute: Callable[[], Any]) -> Any:
        if key not in self._memo:
            self._memo[key] = compute()
        return self._memo[key]

    @property
    def pod_targets(self) -> list[PodTarget]:
        """Pod targets linked in this configuration."""
        return self.target.pod_targets_for_build_configuration(self.configuration_name)

    @property
    def search_paths_pod_targets(self) -> list[PodTarget]:
        """Pod targets that are importable but not linked."""

        def compute() -> list[PodTarget]:
            linked = set(self.pod_targets)
            found: list[PodTarget] = []
            for aggregate in self.target.search_paths_aggregate_targets:
                for pod_target in aggregate.pod_targets_for_build_configuration(
                    self.configuration_name
                ):
                    if pod_target not in linked and pod_target not in found:
                        found.append(pod_target)
            return found

        return self._memoized("search_paths_pod_targets", compute)

    def _searched_pod_targets(self) -> list[PodTarget]:
        return self.pod_targets + self.search_paths_pod_targets

    @property
    def framework_search_paths(self) -> list[str]:
        def compute() -> list[str]:
            paths: list[str] = []
            for pod_target in self._searched_pod_targets():
                if pod_target.should_build and pod_target.requires_frameworks():
                    paths.append(str(pod_target.configuration_build_dir))
                for vendored in pod_target.vendored_frameworks:
                    parent = PurePosixPath(vendored).parent.as_posix()
                    paths.append(str(VariablePath(PODS_ROOT, parent)))
            return _unique(paths)

        return self._memoized("framework_search_paths", compute)

    @property
    def library_search_paths(self) -> list[str]:
        def compute() -> list[str]:
            return _unique(
                str(pod_target.configuration_build_dir)
                for pod_target in self._searched_pod_targets()
                if pod_target.should_build and not pod_target.requires_frameworks()
            )

        return self._memoized("library_search_paths", compute)

    @property
    def header_search_paths(self) -> list[str]:
        def compute() -> list[str]:
            searched = [
                pod_target
                for pod_target in self._searched_pod_targets()
                if not pod_target.requires_frameworks()
            ]
            if not searched:
                return []
            paths = [str(VariablePath(PODS_ROOT, "Headers/Public"))]
            paths.extend(str(pod_target.public_headers_dir) for pod_target in searched)
            return _unique(paths)

        return self._memoized("header_search_paths", compute)

    def _consumer_values(self, attribute: str) -> list[str]:
        values: list[str] = []
        for pod_target in self.pod_targets:
            for consumer in pod_target.consumers(self.target.platform):
                values.extend(getattr(consumer, attribute))
        return _unique(values)

    @property
    def frameworks(self) -> list[str]:
        """Frameworks linked by the user target, pods' own frameworks first."""

        def compute() -> list[str]:
            names: list[str] = []
            for pod_target in self.pod_targets:
                if pod_target.should_build and pod_target.requires_frameworks():
                    names.append(pod_target.product_basename)
                names.extend(
                    PurePosixPath(vendored).stem for vendored in pod_target.vendored_frameworks
                )
            names.extend(self._consumer_values("frameworks"))
            return _unique(names)

        return self._memoized("frameworks", compute)

    @property
    def weak_frameworks(self) -> list[str]:
        return self._memoized("weak_frameworks", lambda: self._consumer_values("weak_frameworks"))

    @property
    def libraries(self) -> list[str]:
        """Libraries linked by the user target, pod static libraries first."""

        def compute() -> list[str]:
            names = [
                pod_target.label
                for pod_target in self.pod_targets
                if pod_target.should_build and not pod_target.requires_frameworks()
            ]
            names.extend(self._consumer_values("libraries"))
            return _unique(names)

        return self._memoized("libraries", compute)

    @property
    def other_ldflags(self) -> list[str]:
        def compute() -> list[str]:
            flags: list[str] = []
            if self.pod_targets:
                flags.append("-ObjC")
            flags.extend(f'-l"{name}"' for name in self.libraries)
            flags.extend(f'-framework "{name}"' for name in self.frameworks)
            flags.extend(f'-weak_framework "{name}"' for name in self.weak_frameworks)
            return flags

        return self._memoized("other_ldflags", compute)

    @property
    def other_swift_flags(self) -> list[str]:
        if not self.target.uses_swift():
            return []
        return ["-D", "COCOAPODS"]

    @property
    def gcc_preprocessor_definitions(self) -> list[str]:
        return ["COCOAPODS=1"]

    @property
    def always_embed_swift_standard_libraries(self) -> bool:
        """Whether the user target must embed the Swift runtime itself.

        Libraries and extensions rely on their host to do it.
        """
        if not self.target.uses_swift():
            return False
        return not (self.target.library() or self.target.requires_host_target())

    def to_xcconfig(self) -> Xcconfig:
        """Render the settings as an xcconfig."""
        attributes = {
            "PODS_ROOT": str(self.target.relative_pods_root),
            "PODS_PODFILE_DIR_PATH": str(self.target.podfile_dir_relative_path),
            "PODS_BUILD_DIR": str(BUILD_DIR),
            "PODS_CONFIGURATION_BUILD_DIR": (
                f"{PODS_BUILD_DIR}/{CONFIGURATION}{EFFECTIVE_PLATFORM_NAME}"
            ),
            "GCC_PREPROCESSOR_DEFINITIONS": " ".join(
                [INHERITED, *self.gcc_preprocessor_definitions]
            ),
        }
        if self.framework_search_paths:
            attributes["FRAMEWORK_SEARCH_PATHS"] = _quoted_list(self.framework_search_paths)
        if self.library_search_paths:
            attributes["LIBRARY_SEARCH_PATHS"] = _quoted_list(self.library_search_paths)
        if self.header_search_paths:
            attributes["HEADER_SEARCH_PATHS"] = _quoted_list(self.header_search_paths)
        if self.other_ldflags:
            attributes["OTHER_LDFLAGS"] = " ".join([INHERITED, *self.other_ldflags])
        if self.other_swift_flags:
            attributes["OTHER_SWIFT_FLAGS"] = " ".join([INHERITED, *self.other_swift_flags])
        if self.always_embed_swift_standard_libraries:
            attributes["ALWAYS_EMBED_SWIFT_STANDARD_LIBRARIES"] = "YES"
        return Xcconfig(attributes)

    def __repr__(self) -> str:
        return f"AggregateTargetSettings({self.target.name!r}, {self.configuration_name!r})"
