# SPDX-License-Identifier: MIT
"""Read-only view of the user's Xcode project.

The aggregate target only needs to look up native targets by UUID and
read their product type. The project is shared with the integrator,
which may edit it between calls, so nothing read here is cached.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pbxproj import XcodeProject

from podagg.core.errors import IntegrationTargetNotFoundError
from podagg.core.product import ProductType

logger = logging.getLogger(__name__)

NATIVE_TARGET_ISA = "PBXNativeTarget"


class NativeTarget:
    """A PBXNativeTarget of the user project.

    Attributes:
        uuid: Object identifier inside the project.
    """

    def __init__(self, uuid: str, obj: Any) -> None:
        self.uuid = uuid
        self._obj = obj

    @property
    def name(self) -> str:
        return str(self._obj["name"])

    @property
    def product_type(self) -> ProductType:
        return ProductType.from_identifier(str(self._obj["productType"]))

    def __repr__(self) -> str:
        return f"NativeTarget({self.uuid!r}, {self.name!r})"


@runtime_checkable
class UserProject(Protocol):
    """What an aggregate target needs from the project it integrates with."""

    @property
    def path(self) -> Path:
        """Path of the .xcodeproj bundle."""
        ...

    def find_native_target(self, uuid: str) -> NativeTarget | None:
        """Return the native target with `uuid`, or None."""
        ...


class XcodeUserProject:
    """UserProject backed by a pbxproj XcodeProject.

    Example:
        project = XcodeUserProject.load(Path("App.xcodeproj"))
        target = project.native_target("6003F589195388D20070C39A")
        print(target.product_type)
    """

    def __init__(self, project: XcodeProject, path: Path | str) -> None:
        """Wrap an already loaded project.

        Args:
            project: The parsed project.
            path: Path of the .xcodeproj bundle.
        """
        self._project = project
        self._path = Path(path)

    @classmethod
    def load(cls, path: Path | str) -> XcodeUserProject:
        """Load a project from an .xcodeproj bundle or a project.pbxproj file."""
        path = Path(path)
        pbxproj_path = path / "project.pbxproj" if path.suffix == ".xcodeproj" else path
        logger.debug("Loading user project %s", pbxproj_path)
        bundle = pbxproj_path.parent if pbxproj_path.name == "project.pbxproj" else path
        return cls(XcodeProject.load(str(pbxproj_path)), bundle)

    @property
    def path(self) -> Path:
        return self._path

    def find_native_target(self, uuid: str) -> NativeTarget | None:
        obj = self._project.objects[uuid]
        if obj is None or "isa" not in obj or obj["isa"] != NATIVE_TARGET_ISA:
            return None
        return NativeTarget(uuid, obj)

    def native_target(self, uuid: str) -> NativeTarget:
        """Like find_native_target, but a miss is an error.

        Raises:
            IntegrationTargetNotFoundError: If no native target has `uuid`.
        """
        target = self.find_native_target(uuid)
        if target is None:
            raise IntegrationTargetNotFoundError(uuid)
        return target

    def __repr__(self) -> str:
        return f"XcodeUserProject({str(self._path)!r})"
