# SPDX-License-Identifier: MIT
"""Shared fixtures for podagg tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from podagg.core.aggregate_target import AggregateTarget
from podagg.core.definition import Podfile, TargetDefinition
from podagg.core.platform import Platform
from podagg.core.pod_target import PodTarget
from podagg.core.product import ProductType
from podagg.core.sandbox import Sandbox
from podagg.core.specification import Specification
from podagg.core.user_project import NativeTarget

CONFIGURATIONS = {"Debug": "debug", "Release": "release"}


class StubUserProject:
    """In-memory user project mapping UUIDs to product types."""

    def __init__(self, path: Path, targets: dict[str, ProductType]) -> None:
        self._path = path
        self.targets = dict(targets)

    @property
    def path(self) -> Path:
        return self._path

    def find_native_target(self, uuid: str) -> NativeTarget | None:
        product_type = self.targets.get(uuid)
        if product_type is None:
            return None
        return NativeTarget(uuid, {"name": uuid, "productType": product_type.value})


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    return tmp_path / "App"


@pytest.fixture
def sandbox(project_dir: Path) -> Sandbox:
    return Sandbox(project_dir / "Pods")


@pytest.fixture
def platform() -> Platform:
    return Platform("ios", "12.0")


@pytest.fixture
def make_pod_target(sandbox: Sandbox, platform: Platform):
    """Factory for pod targets sharing the test sandbox."""

    def _make(
        name: str,
        *,
        host_requires_frameworks: bool = False,
        attributes: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> PodTarget:
        spec = Specification(name, "1.0.0", attributes or {})
        return PodTarget(
            sandbox,
            host_requires_frameworks,
            CONFIGURATIONS,
            ["arm64"],
            platform,
            [spec],
            **kwargs,
        )

    return _make


@pytest.fixture
def make_aggregate_target(sandbox: Sandbox, platform: Platform, project_dir: Path):
    """Factory for aggregate targets of a "Pods-App" definition."""

    def _make(
        pod_targets_by_configuration: dict[str, list[PodTarget]] | None = None,
        *,
        product_types: list[ProductType] | None = None,
        podfile: Podfile | None = None,
        build_configurations: dict[str, str] | None = None,
        host_requires_frameworks: bool = False,
        definition: TargetDefinition | None = None,
    ) -> AggregateTarget:
        configurations = (
            CONFIGURATIONS if build_configurations is None else build_configurations
        )
        if definition is None:
            definition = TargetDefinition(
                "App",
                podfile or Podfile(),
                build_configurations=configurations or None,
            )
        user_project = None
        uuids: list[str] = []
        if product_types is not None:
            uuids = [f"UUID{i}" for i in range(len(product_types))]
            user_project = StubUserProject(
                project_dir / "App.xcodeproj", dict(zip(uuids, product_types))
            )
        return AggregateTarget(
            sandbox,
            host_requires_frameworks,
            configurations,
            ["arm64"],
            Platform("ios", "12.0"),
            definition,
            project_dir,
            user_project,
            uuids,
            pod_targets_by_configuration or {},
        )

    return _make


@pytest.fixture
def write_xcodeproj():
    """Factory writing a minimal .xcodeproj with one native target per entry."""
    from pbxproj import XcodeProject

    def _write(bundle: Path, targets: dict[str, ProductType]) -> Path:
        objects: dict[str, dict[str, Any]] = {
            "A1B2C3D4E5F6A7B8C9D00021": {
                "isa": "PBXGroup",
                "children": [],
                "sourceTree": "<group>",
            },
        }
        for uuid, product_type in targets.items():
            objects[uuid] = {
                "isa": "PBXNativeTarget",
                "buildPhases": [],
                "buildRules": [],
                "dependencies": [],
                "name": f"Target{uuid}",
                "productType": product_type.value,
            }
        objects["A1B2C3D4E5F6A7B8C9D00001"] = {
            "isa": "PBXProject",
            "mainGroup": "A1B2C3D4E5F6A7B8C9D00021",
            "projectDirPath": "",
            "projectRoot": "",
            "targets": list(targets),
        }
        tree = {
            "archiveVersion": "1",
            "classes": {},
            "objectVersion": "56",
            "objects": objects,
            "rootObject": "A1B2C3D4E5F6A7B8C9D00001",
        }
        bundle.mkdir(parents=True, exist_ok=True)
        XcodeProject(tree, str(bundle / "project.pbxproj")).save()
        return bundle

    return _write
