# SPDX-License-Identifier: MIT
"""Integration manifests.

A manifest is a TOML file describing one integration point: where the
sandbox is, which user project and targets to integrate with and the
pod targets each build configuration uses. Loading it yields a ready
AggregateTarget.

Relative paths are resolved against the manifest's directory.

Example manifest:

    sandbox_root = "Pods"
    user_project = "App.xcodeproj"
    user_target_uuids = ["6003F589195388D20070C39A"]
    host_requires_frameworks = true
    platform = { name = "ios", deployment_target = "12.0" }

    [target_definition]
    name = "App"

    [build_configurations]
    Debug = "debug"
    Release = "release"

    [[pod_targets]]
    name = "Alamofire"
    version = "5.0.0"
    uses_swift = true
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from podagg.core.aggregate_target import AggregateTarget
from podagg.core.definition import Podfile, TargetDefinition
from podagg.core.errors import ManifestError
from podagg.core.platform import Platform
from podagg.core.pod_target import PodTarget
from podagg.core.sandbox import Sandbox
from podagg.core.specification import Specification
from podagg.core.user_project import XcodeUserProject

logger = logging.getLogger(__name__)

SPEC_LIST_ATTRIBUTES = ("frameworks", "weak_frameworks", "libraries", "compiler_flags")


def read_manifest(path: Path | str) -> dict[str, Any]:
    """Read and parse a manifest file.

    Raises:
        ManifestError: If the file cannot be read or is not valid TOML.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except OSError as e:
        raise ManifestError(path, f"cannot read manifest: {e.strerror or e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(path, f"invalid TOML: {e}") from e


def _require(data: dict[str, Any], key: str, kind: type, path: Path) -> Any:
    if key not in data:
        raise ManifestError(path, f"missing required key {key!r}")
    value = data[key]
    if not isinstance(value, kind):
        raise ManifestError(path, f"{key!r} must be a {kind.__name__}")
    return value


def _string_list(data: dict[str, Any], key: str, path: Path) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ManifestError(path, f"{key!r} must be a list of strings")
    return value


def _specs(entry: dict[str, Any], name: str, path: Path) -> list[Specification]:
    version = str(entry.get("version", "0.0.0"))
    attributes = {key: _string_list(entry, key, path) for key in SPEC_LIST_ATTRIBUTES}
    platform_attributes = entry.get("platforms", {})
    if not isinstance(platform_attributes, dict):
        raise ManifestError(path, f"pod target {name!r}: 'platforms' must be a table")
    specs = [Specification(name, version, attributes, platform_attributes)]
    specs.extend(
        Specification(f"{name}/{subspec}", version)
        for subspec in _string_list(entry, "subspecs", path)
    )
    return specs


def load_manifest(path: Path | str) -> AggregateTarget:
    """Build the aggregate target described by a manifest.

    Args:
        path: Path to the TOML manifest.

    Returns:
        The aggregate target. Its xcconfigs are not generated yet.

    Raises:
        ManifestError: If the manifest is unreadable or inconsistent.
    """
    path = Path(path)
    data = read_manifest(path)
    base_dir = path.parent.absolute()

    sandbox = Sandbox(base_dir / _require(data, "sandbox_root", str, path))

    platform_data = _require(data, "platform", dict, path)
    try:
        platform = Platform(
            _require(platform_data, "name", str, path),
            platform_data.get("deployment_target"),
        )
    except ValueError as e:
        raise ManifestError(path, str(e)) from e

    podfile_path = data.get("podfile")
    podfile = Podfile(
        defined_in_file=base_dir / podfile_path if podfile_path else None,
        generate_bridge_support=bool(data.get("generate_bridge_support", False)),
    )

    definition_data = _require(data, "target_definition", dict, path)
    build_configurations = data.get("build_configurations")
    if build_configurations is not None and not isinstance(build_configurations, dict):
        raise ManifestError(path, "'build_configurations' must be a table")
    try:
        definition = TargetDefinition(
            _require(definition_data, "name", str, path),
            podfile,
            abstract=bool(definition_data.get("abstract", False)),
            build_configurations=build_configurations,
        )
    except ValueError as e:
        raise ManifestError(path, str(e)) from e
    configurations = definition.build_configurations

    user_project = None
    if data.get("user_project"):
        project_path = base_dir / _require(data, "user_project", str, path)
        try:
            user_project = XcodeUserProject.load(project_path)
        except OSError as e:
            raise ManifestError(
                path, f"cannot read user project {project_path}: {e.strerror or e}"
            ) from e
        except ValueError as e:
            raise ManifestError(path, f"invalid user project {project_path}: {e}") from e
    if "client_root" in data:
        client_root = base_dir / data["client_root"]
    elif user_project is not None:
        client_root = user_project.path.parent
    else:
        client_root = base_dir

    host_requires_frameworks = bool(data.get("host_requires_frameworks", False))
    archs = _string_list(data, "archs", path)

    pod_targets_by_configuration: dict[str, list[PodTarget]] = {
        configuration: [] for configuration in configurations
    }
    entries = data.get("pod_targets", [])
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise ManifestError(path, "'pod_targets' must be an array of tables")
    for entry in entries:
        name = _require(entry, "name", str, path)
        pod_target = PodTarget(
            sandbox,
            host_requires_frameworks,
            configurations,
            archs,
            platform,
            _specs(entry, name, path),
            should_build=bool(entry.get("should_build", True)),
            static_framework=bool(entry.get("static_framework", False)),
            uses_swift=bool(entry.get("uses_swift", False)),
            resources=_string_list(entry, "resources", path),
            resource_bundles=_string_list(entry, "resource_bundles", path),
            vendored_frameworks=_string_list(entry, "vendored_frameworks", path),
        )
        if "configurations" in entry:
            entry_configurations = _string_list(entry, "configurations", path)
        else:
            entry_configurations = list(configurations)
        for configuration in entry_configurations:
            if configuration not in pod_targets_by_configuration:
                raise ManifestError(
                    path,
                    f"pod target {name!r} uses unknown build configuration "
                    f"{configuration!r}",
                )
            pod_targets_by_configuration[configuration].append(pod_target)

    target = AggregateTarget(
        sandbox,
        host_requires_frameworks,
        configurations,
        archs,
        platform,
        definition,
        client_root,
        user_project,
        _string_list(data, "user_target_uuids", path),
        pod_targets_by_configuration,
    )
    logger.info(
        "Loaded %s with %d pod targets from %s", target, len(target.pod_targets), path
    )
    return target
