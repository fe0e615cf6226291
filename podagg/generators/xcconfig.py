# SPDX-License-Identifier: MIT
"""Xcconfig generator.

Writes one `.xcconfig` file per build configuration of an aggregate
target and records each in `target.xcconfigs`, where the user project
integrator looks for overridden settings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from podagg.generators.generator import BaseGenerator

if TYPE_CHECKING:
    from podagg.core.aggregate_target import AggregateTarget

logger = logging.getLogger(__name__)


class XcconfigGenerator(BaseGenerator):
    """Generator that writes per-configuration xcconfig files.

    Example:
        generator = XcconfigGenerator()
        generator.generate(target)
        # Writes Pods/Target Support Files/Pods-App/Pods-App.debug.xcconfig, ...
    """

    def __init__(self) -> None:
        super().__init__("xcconfig")

    def generate(
        self, target: AggregateTarget, output_dir: Path | None = None
    ) -> list[Path]:
        written: list[Path] = []
        for configuration in target.user_build_configurations:
            xcconfig = target.build_settings(configuration).to_xcconfig()
            path = target.xcconfig_path(configuration)
            if output_dir is not None:
                path = Path(output_dir) / path.name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(xcconfig.to_string())
            logger.debug("Wrote %s", path)
            target.xcconfigs[configuration] = xcconfig
            written.append(path)
        return written
