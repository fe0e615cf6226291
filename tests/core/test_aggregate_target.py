# SPDX-License-Identifier: MIT
"""Tests for podagg.core.aggregate_target."""

from pathlib import Path

import pytest

from podagg.core.aggregate_target import AggregateTarget
from podagg.core.build_settings import AggregateTargetSettings
from podagg.core.definition import Podfile, TargetDefinition
from podagg.core.errors import (
    AmbiguousProductTypeError,
    ConfigurationError,
    ConfigurationNotFoundError,
    InformativeError,
    IntegrationTargetNotFoundError,
    InvalidTargetDefinitionError,
    NoBuildSettingsError,
)
from podagg.core.platform import Platform
from podagg.core.product import ProductType


class TestConstruction:
    def test_requires_target_definition(self, sandbox, project_dir):
        with pytest.raises(InvalidTargetDefinitionError, match="without a TargetDefinition"):
            AggregateTarget(
                sandbox,
                False,
                {"Debug": "debug"},
                [],
                Platform("ios"),
                None,
                project_dir,
                None,
                [],
                {},
            )

    def test_rejects_abstract_definition(self, sandbox, project_dir):
        definition = TargetDefinition("Abstract", abstract=True)
        with pytest.raises(ConfigurationError, match="abstract"):
            AggregateTarget(
                sandbox,
                False,
                {"Debug": "debug"},
                [],
                Platform("ios"),
                definition,
                project_dir,
                None,
                [],
                {},
            )

    def test_label_and_name(self, make_aggregate_target):
        target = make_aggregate_target()
        assert target.label == "Pods-App"
        assert target.name == "Pods-App"
        assert str(target) == "Pods-App"

    def test_starts_without_xcconfigs_or_search_targets(self, make_aggregate_target):
        target = make_aggregate_target()
        assert target.xcconfigs == {}
        assert target.search_paths_aggregate_targets == []

    def test_product_naming(self, make_aggregate_target):
        static = make_aggregate_target()
        assert static.product_type == "static_library"
        assert static.product_name == "libPods-App.a"

        dynamic = make_aggregate_target(host_requires_frameworks=True)
        assert dynamic.product_type == "framework"
        assert dynamic.product_module_name == "Pods_App"
        assert dynamic.product_name == "Pods_App.framework"


class TestPodTargets:
    def test_flattens_in_first_seen_order(self, make_pod_target, make_aggregate_target):
        a, b, c = make_pod_target("A"), make_pod_target("B"), make_pod_target("C")
        target = make_aggregate_target({"Debug": [a, b], "Release": [c, a]})
        assert target.pod_targets == [a, b, c]

    def test_unknown_configuration_is_empty(self, make_pod_target, make_aggregate_target):
        target = make_aggregate_target({"Debug": [make_pod_target("A")]})
        assert target.pod_targets_for_build_configuration("Beta") == []
        assert target.pod_targets_for_build_configuration("Release") == []

    def test_specs_by_build_configuration(self, make_pod_target, make_aggregate_target):
        a, b = make_pod_target("A"), make_pod_target("B")
        target = make_aggregate_target({"Debug": [a, b], "Release": [b]})
        by_config = target.specs_by_build_configuration()
        assert [s.name for s in by_config["Debug"]] == ["A", "B"]
        assert [s.name for s in by_config["Release"]] == ["B"]

    def test_spec_consumers_use_target_platform(self, make_pod_target, make_aggregate_target):
        target = make_aggregate_target({"Debug": [make_pod_target("A")]})
        consumers = target.spec_consumers()
        assert len(consumers) == 1
        assert consumers[0].platform.name == "ios"

    def test_uses_swift(self, make_pod_target, make_aggregate_target):
        objc = make_pod_target("ObjC")
        swift = make_pod_target("Swift", uses_swift=True)
        assert not make_aggregate_target({"Debug": [objc]}).uses_swift()
        assert make_aggregate_target({"Debug": [objc], "Release": [swift]}).uses_swift()


class TestBuildSettings:
    def test_lookup_by_configuration(self, make_aggregate_target):
        target = make_aggregate_target()
        settings = target.build_settings("Debug")
        assert isinstance(settings, AggregateTargetSettings)
        assert settings.configuration_name == "Debug"

    def test_settings_are_cached(self, make_aggregate_target):
        target = make_aggregate_target()
        assert target.build_settings("Release") is target.build_settings("Release")

    def test_unknown_configuration_lists_available(self, make_aggregate_target):
        target = make_aggregate_target()
        with pytest.raises(ConfigurationNotFoundError) as excinfo:
            target.build_settings("Beta")
        assert excinfo.value.available == ["Debug", "Release"]
        assert "'Beta'" in str(excinfo.value)
        assert "Pods-App" in str(excinfo.value)

    def test_unqualified_returns_first(self, make_aggregate_target):
        target = make_aggregate_target()
        first = target.build_settings()
        assert first.configuration_name == "Debug"
        assert target.build_settings() is first

    def test_unqualified_without_configurations(self, make_aggregate_target):
        target = make_aggregate_target(build_configurations={})
        with pytest.raises(NoBuildSettingsError, match="does not contain any build settings"):
            target.build_settings()


class TestClassification:
    @pytest.mark.parametrize(
        "product_type, library, requires_host",
        [
            (ProductType.FRAMEWORK, True, True),
            (ProductType.DYNAMIC_LIBRARY, True, False),
            (ProductType.STATIC_LIBRARY, True, True),
            (ProductType.APP_EXTENSION, False, True),
            (ProductType.MESSAGES_EXTENSION, False, True),
            (ProductType.WATCH_EXTENSION, False, True),
            (ProductType.XPC_SERVICE, False, True),
            (ProductType.APPLICATION, False, False),
            (ProductType.UNIT_TEST_BUNDLE, False, False),
            (ProductType.ON_DEMAND_INSTALL_CAPABLE_APPLICATION, False, False),
            (ProductType.SYSTEM_EXTENSION, False, False),
            (ProductType.UNKNOWN, False, False),
        ],
    )
    def test_single_product_type(
        self, make_aggregate_target, product_type, library, requires_host
    ):
        target = make_aggregate_target(product_types=[product_type, product_type])
        assert target.library() is library
        assert target.requires_host_target() is requires_host

    def test_without_user_project(self, make_aggregate_target):
        target = make_aggregate_target()
        assert target.user_project is None
        assert target.user_project_path is None
        assert target.user_targets() == []
        assert target.library() is False
        assert target.requires_host_target() is False

    def test_mixed_product_types_are_ambiguous(self, make_aggregate_target):
        target = make_aggregate_target(
            product_types=[ProductType.FRAMEWORK, ProductType.APP_EXTENSION]
        )
        with pytest.raises(AmbiguousProductTypeError) as excinfo:
            target.library()
        assert excinfo.value.product_types == ["framework", "app_extension"]
        assert "Pods-App" in str(excinfo.value)
        with pytest.raises(AmbiguousProductTypeError):
            target.requires_host_target()

    def test_no_user_targets_is_ambiguous(self, make_aggregate_target):
        target = make_aggregate_target(product_types=[])
        with pytest.raises(AmbiguousProductTypeError, match="Found none"):
            target.library()

    def test_missing_uuid_is_a_bug(self, make_aggregate_target):
        target = make_aggregate_target(product_types=[ProductType.APPLICATION])
        target.user_target_uuids.append("MISSING")
        with pytest.raises(IntegrationTargetNotFoundError) as excinfo:
            target.library()
        assert isinstance(excinfo.value, InformativeError)
        assert excinfo.value.uuid == "MISSING"
        assert str(excinfo.value).startswith("[Bug]")
        assert "Pods-App" in str(excinfo.value)

    def test_recomputed_after_project_changes(self, make_aggregate_target):
        target = make_aggregate_target(product_types=[ProductType.APPLICATION])
        assert target.library() is False
        target.user_project.targets["UUID0"] = ProductType.FRAMEWORK
        assert target.library() is True

    def test_user_project_path(self, make_aggregate_target, project_dir):
        target = make_aggregate_target(product_types=[ProductType.APPLICATION])
        assert target.user_project_path == project_dir / "App.xcodeproj"
        assert [t.uuid for t in target.user_targets()] == ["UUID0"]


class TestFrameworkPaths:
    def test_per_configuration_in_dependency_order(
        self, make_pod_target, make_aggregate_target
    ):
        a = make_pod_target("A", host_requires_frameworks=True)
        b = make_pod_target("B", host_requires_frameworks=True)
        target = make_aggregate_target({"Debug": [b, a], "Release": [a]})
        paths = target.framework_paths_by_config()
        assert [p.input_path for p in paths["Debug"]] == [
            "${BUILT_PRODUCTS_DIR}/B/B.framework",
            "${BUILT_PRODUCTS_DIR}/A/A.framework",
        ]
        assert [p.output_path for p in paths["Release"]] == [
            "${TARGET_BUILD_DIR}/${FRAMEWORKS_FOLDER_PATH}/A.framework",
        ]

    def test_static_pods_only_contribute_vendored_frameworks(
        self, make_pod_target, make_aggregate_target
    ):
        a = make_pod_target("A", vendored_frameworks=["A/Vendor/Dyn.framework"])
        target = make_aggregate_target({"Debug": [a]})
        paths = target.framework_paths_by_config()["Debug"]
        assert len(paths) == 1
        assert paths[0].input_path == "${PODS_ROOT}/A/Vendor/Dyn.framework"

    def test_every_configuration_has_an_entry(self, make_aggregate_target):
        target = make_aggregate_target({})
        assert target.framework_paths_by_config() == {"Debug": [], "Release": []}

    def test_computed_once(self, make_pod_target, make_aggregate_target):
        a = make_pod_target("A", host_requires_frameworks=True)
        target = make_aggregate_target({"Debug": [a]})
        first = target.framework_paths_by_config()
        a.should_build = False
        assert target.framework_paths_by_config() is first
        assert len(first["Debug"]) == 1


class TestResourcePaths:
    def test_collects_static_pod_resources(self, make_pod_target, make_aggregate_target):
        a = make_pod_target("A", resources=["A/a.png"], resource_bundles=["ABundle"])
        target = make_aggregate_target({"Debug": [a], "Release": []})
        assert target.resource_paths_by_config() == {
            "Debug": [
                "${PODS_ROOT}/A/a.png",
                "${PODS_CONFIGURATION_BUILD_DIR}/A/ABundle.bundle",
            ],
            "Release": [],
        }

    def test_excludes_dynamic_framework_pods(self, make_pod_target, make_aggregate_target):
        static = make_pod_target("Static", resources=["Static/s.png"])
        dynamic = make_pod_target(
            "Dynamic", host_requires_frameworks=True, resources=["Dynamic/d.png"]
        )
        without = make_aggregate_target({"Debug": [static]})
        with_dynamic = make_aggregate_target({"Debug": [static, dynamic]})
        assert (
            with_dynamic.resource_paths_by_config()["Debug"]
            == without.resource_paths_by_config()["Debug"]
        )

    def test_follows_pod_target_order(self, make_pod_target, make_aggregate_target):
        a = make_pod_target("A", resources=["A/a.png"])
        b = make_pod_target("B", resources=["B/b.png"])
        target = make_aggregate_target({"Debug": [a, b], "Release": [b, a]})
        resources = target.resource_paths_by_config()
        assert resources["Debug"] == ["${PODS_ROOT}/A/a.png", "${PODS_ROOT}/B/b.png"]
        assert resources["Release"] == resources["Debug"]

    def test_includes_pods_not_requiring_frameworks(
        self, make_pod_target, make_aggregate_target
    ):
        pod = make_pod_target("Dynamic", resources=["Dynamic/d.png"])
        target = make_aggregate_target({"Debug": [pod]})
        assert target.resource_paths_by_config()["Debug"] == ["${PODS_ROOT}/Dynamic/d.png"]

    def test_includes_static_frameworks(self, make_pod_target, make_aggregate_target):
        pod = make_pod_target(
            "StaticFW",
            host_requires_frameworks=True,
            static_framework=True,
            resources=["StaticFW/r.png"],
        )
        target = make_aggregate_target({"Debug": [pod]})
        assert target.resource_paths_by_config()["Debug"] == ["${PODS_ROOT}/StaticFW/r.png"]

    def test_includes_unbuilt_framework_pods(self, make_pod_target, make_aggregate_target):
        pod = make_pod_target(
            "Prebuilt",
            host_requires_frameworks=True,
            should_build=False,
            resources=["Prebuilt/r.png"],
        )
        target = make_aggregate_target({"Debug": [pod]})
        assert target.resource_paths_by_config()["Debug"] == ["${PODS_ROOT}/Prebuilt/r.png"]

    def test_deduplicates_preserving_first_seen_order(
        self, make_pod_target, make_aggregate_target
    ):
        a = make_pod_target("A", resources=["Shared/s.png", "A/a.png"])
        b = make_pod_target("B", resources=["B/b.png", "Shared/s.png"])
        target = make_aggregate_target({"Debug": [a, b]})
        assert target.resource_paths_by_config()["Debug"] == [
            "${PODS_ROOT}/Shared/s.png",
            "${PODS_ROOT}/A/a.png",
            "${PODS_ROOT}/B/b.png",
        ]

    def test_appends_bridge_support_once(self, make_pod_target, make_aggregate_target):
        a = make_pod_target("A", resources=["A/a.png"])
        b = make_pod_target("B")
        target = make_aggregate_target(
            {"Debug": [a, b], "Release": []},
            podfile=Podfile(generate_bridge_support=True),
        )
        bridge_support = "Target Support Files/Pods-App/Pods-App.bridgesupport"
        resources = target.resource_paths_by_config()
        assert resources["Debug"] == ["${PODS_ROOT}/A/a.png", bridge_support]
        assert resources["Release"] == [bridge_support]


class TestBridgeSupport:
    def test_absent_when_disabled(self, make_aggregate_target):
        assert make_aggregate_target().bridge_support_file() is None

    def test_relative_to_sandbox_when_enabled(self, make_aggregate_target, sandbox):
        target = make_aggregate_target(podfile=Podfile(generate_bridge_support=True))
        path = target.bridge_support_file()
        assert path == Path("Target Support Files/Pods-App/Pods-App.bridgesupport")
        assert sandbox.root / path == target.bridge_support_path


class TestSupportFiles:
    def test_absolute_paths(self, make_aggregate_target, sandbox):
        target = make_aggregate_target()
        support = sandbox.root / "Target Support Files" / "Pods-App"
        assert target.support_files_dir == support
        assert target.acknowledgements_basepath == support / "Pods-App-acknowledgements"
        assert target.copy_resources_script_path == support / "Pods-App-resources.sh"
        assert target.embed_frameworks_script_path == support / "Pods-App-frameworks.sh"
        assert target.xcconfig_path("Debug") == support / "Pods-App.debug.xcconfig"
        assert target.xcconfig_path("App/Store") == support / "Pods-App.app-store.xcconfig"

    def test_check_manifest_lock_output(self, make_aggregate_target):
        target = make_aggregate_target()
        assert (
            target.check_manifest_lock_script_output_file_path
            == "$(DERIVED_FILE_DIR)/Pods-App-checkManifestLockResult.txt"
        )

    def test_relative_paths(self, make_aggregate_target):
        target = make_aggregate_target()
        assert str(target.relative_pods_root) == "${SRCROOT}/Pods"
        assert (
            target.xcconfig_relative_path("Release")
            == "Pods/Target Support Files/Pods-App/Pods-App.release.xcconfig"
        )
        assert (
            target.copy_resources_script_relative_path
            == "${SRCROOT}/Pods/Target Support Files/Pods-App/Pods-App-resources.sh"
        )
        assert (
            target.embed_frameworks_script_relative_path
            == "${SRCROOT}/Pods/Target Support Files/Pods-App/Pods-App-frameworks.sh"
        )

    def test_podfile_dir_relative_path(self, make_aggregate_target, project_dir):
        target = make_aggregate_target(
            podfile=Podfile(defined_in_file=project_dir.parent / "Podfile")
        )
        assert str(target.podfile_dir_relative_path) == "${SRCROOT}/.."

    def test_podfile_dir_without_file(self, make_aggregate_target):
        target = make_aggregate_target()
        assert str(target.podfile_dir_relative_path) == "${PODS_ROOT}/.."
