# SPDX-License-Identifier: MIT
"""Aggregate targets.

An AggregateTarget clusters the pod targets of one Podfile target
definition into the single "Pods-<name>" target that user targets
depend on. It is a read-only view: the user project and the pod
targets belong to other components and are never modified here.

Facts about the user targets are recomputed on every call, since the
integrator may edit the user project between calls. Framework and
resource paths are computed once per aggregate target.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from podagg.core.build_settings import AggregateTargetSettings, SettingsCache, Xcconfig
from podagg.core.errors import (
    IntegrationTargetNotFoundError,
    InvalidTargetDefinitionError,
)
from podagg.core.index import DependencyIndex
from podagg.core.paths import DERIVED_FILE_DIR, PathTranslator, VariablePath
from podagg.core.product import (
    EMBED_FRAMEWORKS_IN_HOST_TARGET_TYPES,
    LIBRARY_PRODUCT_TYPES,
    ProductTypeResolution,
    classify_product_types,
)
from podagg.core.target import Target

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from podagg.core.definition import Podfile, TargetDefinition
    from podagg.core.platform import Platform
    from podagg.core.pod_target import FrameworkPaths, PodTarget
    from podagg.core.sandbox import Sandbox
    from podagg.core.specification import Consumer, Specification
    from podagg.core.user_project import NativeTarget, UserProject


class AggregateTarget(Target):
    """The target that clusters the pod targets of a target definition.

    Example:
        target = AggregateTarget(
            sandbox, True, {"Debug": "debug", "Release": "release"}, ["arm64"],
            Platform("ios", "12.0"), definition, client_root=project_dir,
            user_project=user_project, user_target_uuids=[uuid],
            pod_targets_for_build_configuration={"Debug": [a, b], "Release": [a]},
        )
        target.resource_paths_by_config()["Debug"]
        target.build_settings("Debug").to_xcconfig()

    Attributes:
        target_definition: The Podfile target definition this target was
            generated for.
        client_root: Directory used to compute paths seen by the user
            project. The user project's directory when integrating,
            otherwise the installation root.
        user_project: The user project to integrate with, or None.
        user_target_uuids: UUIDs of the user targets to integrate with.
            Only the UUIDs are stored so that edits to the project are
            always observed.
        search_paths_aggregate_targets: Aggregate targets whose pods this
            target must be able to import without linking them.
        xcconfigs: Configuration name -> generated xcconfig, filled in by
            the xcconfig generator.
    """

    def __init__(
        self,
        sandbox: Sandbox,
        host_requires_frameworks: bool,
        user_build_configurations: dict[str, str],
        archs: list[str],
        platform: Platform,
        target_definition: TargetDefinition | None,
        client_root: Path | str,
        user_project: UserProject | None,
        user_target_uuids: Sequence[str],
        pod_targets_for_build_configuration: Mapping[str, Sequence[PodTarget]],
    ) -> None:
        if target_definition is None:
            raise InvalidTargetDefinitionError(
                "Can't initialize an AggregateTarget without a TargetDefinition!"
            )
        if target_definition.abstract:
            raise InvalidTargetDefinitionError(
                "Can't initialize an AggregateTarget with an abstract TargetDefinition!"
            )
        self.target_definition = target_definition
        super().__init__(
            sandbox, host_requires_frameworks, user_build_configurations, archs, platform
        )
        self.client_root = Path(client_root)
        self.user_project = user_project
        self.user_target_uuids = list(user_target_uuids)
        self._index = DependencyIndex(pod_targets_for_build_configuration)
        self._paths = PathTranslator(sandbox.root, self.client_root)
        self.search_paths_aggregate_targets: list[AggregateTarget] = []
        self.xcconfigs: dict[str, Xcconfig] = {}
        self._framework_paths_by_config: dict[str, list[FrameworkPaths]] | None = None
        self._resource_paths_by_config: dict[str, list[str]] | None = None
        self._build_settings = SettingsCache(
            self, self.user_build_configurations, self._create_build_settings
        )

    @property
    def label(self) -> str:
        return str(self.target_definition.label)

    @property
    def podfile(self) -> Podfile:
        return self.target_definition.podfile

    # Build settings

    def build_settings(self, configuration_name: str | None = None) -> AggregateTargetSettings:
        """Return the build settings for a configuration.

        Without a configuration name, the settings of the first
        configuration are returned. Settings are built on first request.

        Raises:
            ConfigurationNotFoundError: If the configuration is unknown.
            NoBuildSettingsError: If no configuration name was given and
                the target has no configurations.
        """
        if configuration_name is None:
            return self._build_settings.first()
        return self._build_settings.get(configuration_name)

    def _create_build_settings(self, configuration_name: str) -> AggregateTargetSettings:
        return AggregateTargetSettings(self, configuration_name)

    # User project

    @property
    def user_project_path(self) -> Path | None:
        if self.user_project is None:
            return None
        return self.user_project.path

    def user_targets(self) -> list[NativeTarget]:
        """Resolve the user target UUIDs against the user project.

        Raises:
            IntegrationTargetNotFoundError: If a UUID is not a native target
                of the user project.
        """
        if self.user_project is None:
            return []
        targets = []
        for uuid in self.user_target_uuids:
            native_target = self.user_project.find_native_target(uuid)
            if native_target is None:
                raise IntegrationTargetNotFoundError(uuid, self)
            targets.append(native_target)
        return targets

    def user_product_types(self) -> ProductTypeResolution:
        """Reduce the user targets' product types to a single kind."""
        return classify_product_types(t.product_type for t in self.user_targets())

    def library(self) -> bool:
        """Whether the user targets build a framework or a library.

        Always False without a user project, since nothing is known
        about how the target is integrated.

        Raises:
            AmbiguousProductTypeError: If the user targets do not share
                exactly one product type.
        """
        if self.user_project is None:
            return False
        return self.user_product_types().unwrap(self) in LIBRARY_PRODUCT_TYPES

    def requires_host_target(self) -> bool:
        """Whether the user targets must be embedded in a host target.

        Extensions, frameworks, static libraries and XPC services need
        a host application to embed the pod frameworks for them.
        Always False without a user project.

        Raises:
            AmbiguousProductTypeError: If the user targets do not share
                exactly one product type.
        """
        if self.user_project is None:
            return False
        product_type = self.user_product_types().unwrap(self)
        return product_type in EMBED_FRAMEWORKS_IN_HOST_TARGET_TYPES

    # Pod targets and specs

    @property
    def pod_targets(self) -> list[PodTarget]:
        return self._index.pod_targets

    def pod_targets_for_build_configuration(self, build_configuration: str) -> list[PodTarget]:
        return self._index.for_configuration(build_configuration)

    def specs(self) -> list[Specification]:
        return self._index.specs()

    def specs_by_build_configuration(self) -> dict[str, list[Specification]]:
        return self._index.specs_by_configuration(self.user_build_configurations)

    def spec_consumers(self) -> list[Consumer]:
        return self._index.spec_consumers(self.platform)

    def uses_swift(self) -> bool:
        return any(pod_target.uses_swift() for pod_target in self.pod_targets)

    # Artifacts

    def framework_paths_by_config(self) -> dict[str, list[FrameworkPaths]]:
        """Dynamic frameworks to embed, per build configuration."""
        if self._framework_paths_by_config is None:
            self._framework_paths_by_config = {
                config: [
                    paths
                    for pod_target in self.pod_targets_for_build_configuration(config)
                    for paths in pod_target.framework_paths(False)
                ]
                for config in self.user_build_configurations
            }
        return self._framework_paths_by_config

    def resource_paths_by_config(self) -> dict[str, list[str]]:
        """Resources to copy, per build configuration, without duplicates.

        Pod targets are visited in `pod_targets` order for every
        configuration.

        Pods built as dynamic frameworks carry their resources inside the
        framework bundle and are left out.
        """
        if self._resource_paths_by_config is None:
            relevant = {
                pod_target
                for pod_target in self.pod_targets
                if not pod_target.builds_dynamic_framework()
            }
            bridge_support = self.bridge_support_file()
            resources_by_config: dict[str, list[str]] = {}
            for config in self.user_build_configurations:
                in_config = set(self.pod_targets_for_build_configuration(config))
                paths = [
                    path
                    for pod_target in self.pod_targets
                    if pod_target in relevant and pod_target in in_config
                    for path in pod_target.resource_paths(False)
                ]
                if bridge_support is not None:
                    paths.append(str(bridge_support))
                resources_by_config[config] = list(dict.fromkeys(paths))
            logger.debug(
                "Collected resources of %s for %d configurations",
                self,
                len(resources_by_config),
            )
            self._resource_paths_by_config = resources_by_config
        return self._resource_paths_by_config

    def bridge_support_file(self) -> Path | None:
        """Bridge support file relative to the sandbox root, if generated."""
        if not self.podfile.generate_bridge_support:
            return None
        return self.bridge_support_path.relative_to(self.sandbox.root)

    # Support files

    @property
    def acknowledgements_basepath(self) -> Path:
        """Acknowledgements path without extension; generators add it."""
        return self.support_files_dir / f"{self.label}-acknowledgements"

    @property
    def copy_resources_script_path(self) -> Path:
        return self.support_files_dir / f"{self.label}-resources.sh"

    @property
    def embed_frameworks_script_path(self) -> Path:
        return self.support_files_dir / f"{self.label}-frameworks.sh"

    @property
    def check_manifest_lock_script_output_file_path(self) -> str:
        return str(VariablePath(DERIVED_FILE_DIR, f"{self.label}-checkManifestLockResult.txt"))

    @property
    def relative_pods_root(self) -> VariablePath:
        """The sandbox root as seen from the user project's `${SRCROOT}`."""
        return self._paths.pods_root_relative

    @property
    def podfile_dir_relative_path(self) -> VariablePath:
        """The Podfile's directory as seen from `${SRCROOT}`."""
        return self._paths.definition_directory_relative(self.podfile.defined_in_file)

    def xcconfig_relative_path(self, config_name: str) -> str:
        return self._paths.relative(self.xcconfig_path(config_name))

    @property
    def copy_resources_script_relative_path(self) -> str:
        return str(self._paths.relative_from_root_variable(self.copy_resources_script_path))

    @property
    def embed_frameworks_script_relative_path(self) -> str:
        return str(self._paths.relative_from_root_variable(self.embed_frameworks_script_path))
