# SPDX-License-Identifier: MIT
"""Pod targets: the per-pod build units an aggregate target collects.

A PodTarget is produced by dependency resolution and is shared between
every aggregate target that uses the pod. Two PodTargets are only equal
if they are the same object; two instances of the same pod (for example
built for different platforms) are distinct.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from podagg.core.paths import (
    BUILT_PRODUCTS_DIR,
    FRAMEWORKS_FOLDER_PATH,
    PODS_CONFIGURATION_BUILD_DIR,
    PODS_ROOT,
    TARGET_BUILD_DIR,
    VariablePath,
)
from podagg.core.target import Target

if TYPE_CHECKING:
    from podagg.core.platform import Platform
    from podagg.core.sandbox import Sandbox
    from podagg.core.specification import Consumer, Specification


@dataclass(frozen=True)
class FrameworkPaths:
    """Input and output of one framework copied by the embed script.

    Attributes:
        input_path: Where the framework is found at build time.
        output_path: Where it is copied inside the product bundle.
    """

    input_path: str
    output_path: str


def _embedded_framework_path(name: str) -> str:
    return f"{TARGET_BUILD_DIR}/{FRAMEWORKS_FOLDER_PATH}/{name}"


class PodTarget(Target):
    """The build unit of a single pod.

    Attributes:
        specs: Root spec and subspecs of the pod used by this target.
        should_build: False for pods that ship only prebuilt artifacts
            and have no sources to compile.
        resources: Resource paths relative to the sandbox root.
        resource_bundles: Names of resource bundles built by the pod.
        vendored_frameworks: Prebuilt dynamic frameworks, relative to the
            sandbox root.
        test_resources: Resources only used by the pod's test specs.
        test_vendored_frameworks: Dynamic frameworks only used by tests.
    """

    def __init__(
        self,
        sandbox: Sandbox,
        host_requires_frameworks: bool,
        user_build_configurations: dict[str, str],
        archs: list[str],
        platform: Platform,
        specs: Sequence[Specification],
        *,
        should_build: bool = True,
        static_framework: bool = False,
        uses_swift: bool = False,
        resources: Iterable[str] = (),
        resource_bundles: Iterable[str] = (),
        vendored_frameworks: Iterable[str] = (),
        test_resources: Iterable[str] = (),
        test_vendored_frameworks: Iterable[str] = (),
    ) -> None:
        if not specs:
            raise ValueError("A PodTarget needs at least one specification")
        super().__init__(
            sandbox, host_requires_frameworks, user_build_configurations, archs, platform
        )
        self.specs = list(specs)
        self.should_build = should_build
        self._static_framework = static_framework
        self._uses_swift = uses_swift
        self.resources = list(resources)
        self.resource_bundles = list(resource_bundles)
        self.vendored_frameworks = list(vendored_frameworks)
        self.test_resources = list(test_resources)
        self.test_vendored_frameworks = list(test_vendored_frameworks)

    @property
    def label(self) -> str:
        return self.specs[0].root_name

    @property
    def pod_name(self) -> str:
        return self.label

    def static_framework(self) -> bool:
        return self._static_framework

    def uses_swift(self) -> bool:
        return self._uses_swift

    def builds_dynamic_framework(self) -> bool:
        """Whether the pod is built into its own embedded framework."""
        return self.should_build and self.requires_frameworks() and not self.static_framework()

    def consumers(self, platform: Platform | None = None) -> list[Consumer]:
        return [spec.consumer(platform or self.platform) for spec in self.specs]

    def build_product_path(self, directory: object = BUILT_PRODUCTS_DIR) -> str:
        return f"{directory}/{self.label}/{self.product_name}"

    @property
    def configuration_build_dir(self) -> VariablePath:
        return VariablePath(PODS_CONFIGURATION_BUILD_DIR, self.label)

    @property
    def public_headers_dir(self) -> VariablePath:
        return VariablePath(PODS_ROOT, f"Headers/Public/{self.label}")

    def framework_paths(self, include_test_spec_paths: bool = False) -> list[FrameworkPaths]:
        """Frameworks that the embed-frameworks script must copy.

        Args:
            include_test_spec_paths: Also include frameworks only needed by
                the pod's test specs.
        """
        paths: list[FrameworkPaths] = []
        if self.builds_dynamic_framework():
            paths.append(
                FrameworkPaths(
                    self.build_product_path(),
                    _embedded_framework_path(self.product_name),
                )
            )
        vendored = list(self.vendored_frameworks)
        if include_test_spec_paths:
            vendored.extend(self.test_vendored_frameworks)
        for relative in vendored:
            paths.append(
                FrameworkPaths(
                    str(VariablePath(PODS_ROOT, relative)),
                    _embedded_framework_path(PurePosixPath(relative).name),
                )
            )
        return paths

    def resource_paths(self, include_test_spec_paths: bool = False) -> list[str]:
        """Resources that the copy-resources script must copy.

        Args:
            include_test_spec_paths: Also include test spec resources.
        """
        relative = list(self.resources)
        if include_test_spec_paths:
            relative.extend(self.test_resources)
        paths = [str(VariablePath(PODS_ROOT, r)) for r in relative]
        paths.extend(
            f"{self.configuration_build_dir}/{bundle}.bundle"
            for bundle in self.resource_bundles
        )
        return paths
