# SPDX-License-Identifier: MIT
"""
Podagg: consolidates pod targets into aggregate targets.

An aggregate target stands in for all the pods a Podfile target
definition uses, per build configuration, and computes the build
settings, framework and resource lists the user project needs to link
and embed them.
"""

from __future__ import annotations

# Re-export commonly used classes for convenient imports
from podagg.configure.manifest import load_manifest
from podagg.core.aggregate_target import AggregateTarget
from podagg.core.definition import Podfile, TargetDefinition
from podagg.core.platform import Platform
from podagg.core.pod_target import FrameworkPaths, PodTarget
from podagg.core.product import ProductType
from podagg.core.sandbox import Sandbox
from podagg.core.specification import Specification
from podagg.core.user_project import XcodeUserProject

__version__ = "0.1.0"

# Public API exports
__all__ = [
    # Version
    "__version__",
    # Core classes
    "AggregateTarget",
    "FrameworkPaths",
    "Platform",
    "PodTarget",
    "Podfile",
    "ProductType",
    "Sandbox",
    "Specification",
    "TargetDefinition",
    "XcodeUserProject",
    # Configuration
    "load_manifest",
]
