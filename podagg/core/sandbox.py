# SPDX-License-Identifier: MIT
"""The sandbox: the directory where pods and their support files live."""

from __future__ import annotations

from pathlib import Path

TARGET_SUPPORT_FILES_DIRNAME = "Target Support Files"


class Sandbox:
    """Layout of the Pods directory.

    The sandbox only computes paths; it never creates or reads files.

    Attributes:
        root: Absolute path of the Pods directory.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).absolute()

    @property
    def target_support_files_root(self) -> Path:
        return self.root / TARGET_SUPPORT_FILES_DIRNAME

    def target_support_files_dir(self, name: str) -> Path:
        """Directory holding the generated support files of a target."""
        return self.target_support_files_root / name

    def pod_dir(self, name: str) -> Path:
        return self.root / name

    def __repr__(self) -> str:
        return f"Sandbox({str(self.root)!r})"
