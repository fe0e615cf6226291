# SPDX-License-Identifier: MIT
"""Target base class shared by pod targets and aggregate targets.

A Target is one native target generated into the Pods project. It knows
its name, how its product is packaged and where its support files live.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from podagg.core.platform import Platform
    from podagg.core.sandbox import Sandbox

# How a target's product is packaged
PackagingType = Literal["framework", "static_library"]


def c99ext_identifier(name: str) -> str:
    """Turn a label into a valid C99 extended identifier (module name)."""
    identifier = re.sub(r"[^0-9A-Za-z_]", "_", name)
    if identifier[:1].isdigit():
        identifier = f"_{identifier}"
    return identifier


class Target:
    """A target generated into the Pods project.

    Subclasses provide `label`.

    Attributes:
        sandbox: The sandbox the target's files are generated into.
        host_requires_frameworks: Whether the user target links pods as
            frameworks (`use_frameworks!`).
        user_build_configurations: Build configuration name -> build type.
        archs: Architectures the target is built for.
        platform: Platform the target is built for.
    """

    def __init__(
        self,
        sandbox: Sandbox,
        host_requires_frameworks: bool,
        user_build_configurations: dict[str, str],
        archs: list[str],
        platform: Platform,
    ) -> None:
        self.sandbox = sandbox
        self.host_requires_frameworks = host_requires_frameworks
        self.user_build_configurations = dict(user_build_configurations)
        self.archs = list(archs)
        self.platform = platform

    @property
    def label(self) -> str:
        raise NotImplementedError

    @property
    def name(self) -> str:
        return self.label

    def requires_frameworks(self) -> bool:
        return self.host_requires_frameworks

    def static_framework(self) -> bool:
        return False

    @property
    def product_type(self) -> PackagingType:
        return "framework" if self.requires_frameworks() else "static_library"

    @property
    def product_module_name(self) -> str:
        return c99ext_identifier(self.label)

    @property
    def product_basename(self) -> str:
        if self.requires_frameworks():
            return self.product_module_name
        return self.label

    @property
    def product_name(self) -> str:
        """File name of the built product."""
        if self.requires_frameworks():
            return f"{self.product_module_name}.framework"
        return f"lib{self.label}.a"

    # Support files

    @property
    def support_files_dir(self) -> Path:
        return self.sandbox.target_support_files_dir(self.name)

    def xcconfig_path(self, variant: str | None = None) -> Path:
        """Absolute path of the xcconfig file for a build variant.

        Args:
            variant: Configuration name; "/" is replaced by "-" and the
                result is lowercased.
        """
        if variant:
            suffix = variant.replace("/", "-").lower()
            return self.support_files_dir / f"{self.label}.{suffix}.xcconfig"
        return self.support_files_dir / f"{self.label}.xcconfig"

    @property
    def bridge_support_path(self) -> Path:
        return self.support_files_dir / f"{self.label}.bridgesupport"

    @property
    def dummy_source_path(self) -> Path:
        return self.support_files_dir / f"{self.label}-dummy.m"

    @property
    def umbrella_header_path(self) -> Path:
        return self.support_files_dir / f"{self.label}-umbrella.h"

    @property
    def module_map_path(self) -> Path:
        return self.support_files_dir / f"{self.label}.modulemap"

    @property
    def info_plist_path(self) -> Path:
        return self.support_files_dir / f"{self.label}-Info.plist"

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
