# SPDX-License-Identifier: MIT
"""Path translation between the sandbox and the user project.

Generated files reference sandbox paths in two ways:

- relative to the client root, resolved now and baked into the file
- through a build variable such as ``${SRCROOT}``, which Xcode expands at
  build time so the project can move without regenerating files

Build-variable paths are a separate value type (VariablePath) so they are
never mistaken for filesystem paths. They deliberately do not implement
``os.PathLike``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath


@dataclass(frozen=True)
class BuildVariable:
    """A build setting reference that the host build tool substitutes.

    Attributes:
        name: Build setting name, e.g. "SRCROOT".
        parens: Render as ``$(NAME)`` instead of ``${NAME}``.
    """

    name: str
    parens: bool = False

    def __str__(self) -> str:
        if self.parens:
            return f"$({self.name})"
        return f"${{{self.name}}}"


SRCROOT = BuildVariable("SRCROOT")
PODS_ROOT = BuildVariable("PODS_ROOT")
DERIVED_FILE_DIR = BuildVariable("DERIVED_FILE_DIR", parens=True)
BUILT_PRODUCTS_DIR = BuildVariable("BUILT_PRODUCTS_DIR")
TARGET_BUILD_DIR = BuildVariable("TARGET_BUILD_DIR")
FRAMEWORKS_FOLDER_PATH = BuildVariable("FRAMEWORKS_FOLDER_PATH")
PODS_BUILD_DIR = BuildVariable("PODS_BUILD_DIR")
PODS_CONFIGURATION_BUILD_DIR = BuildVariable("PODS_CONFIGURATION_BUILD_DIR")
BUILD_DIR = BuildVariable("BUILD_DIR")
CONFIGURATION = BuildVariable("CONFIGURATION", parens=True)
EFFECTIVE_PLATFORM_NAME = BuildVariable("EFFECTIVE_PLATFORM_NAME", parens=True)


@dataclass(frozen=True)
class VariablePath:
    """A path anchored at a build variable, e.g. ``${SRCROOT}/Pods``.

    Attributes:
        variable: The anchoring build variable.
        relative: POSIX path below the variable ("" for the variable itself).
    """

    variable: BuildVariable
    relative: str = ""

    def joinpath(self, *parts: str) -> VariablePath:
        relative = PurePosixPath(self.relative or ".", *parts).as_posix()
        return VariablePath(self.variable, "" if relative == "." else relative)

    def __truediv__(self, part: str) -> VariablePath:
        return self.joinpath(part)

    def __str__(self) -> str:
        if not self.relative:
            return str(self.variable)
        return f"{self.variable}/{self.relative}"


# Podfile directory when the Podfile has no backing file
PODFILE_DIR_FALLBACK = VariablePath(PODS_ROOT, "..")


def relative_posix(path: Path | str, start: Path | str) -> str:
    """Return `path` relative to `start` as a POSIX string.

    Unlike Path.relative_to this walks up with ".." when `path` is not
    below `start`.
    """
    return Path(os.path.relpath(Path(path), Path(start))).as_posix()


class PathTranslator:
    """Computes client-root relative references to sandbox paths.

    Attributes:
        sandbox_root: Absolute path of the Pods directory.
        client_root: Directory all externally visible paths are relative to.
            The user project's directory when integrating, otherwise the
            installation root.
    """

    def __init__(self, sandbox_root: Path | str, client_root: Path | str) -> None:
        self.sandbox_root = Path(sandbox_root)
        self.client_root = Path(client_root)

    def relative(self, path: Path | str) -> str:
        """Return `path` relative to the client root."""
        return relative_posix(path, self.client_root)

    def relative_from_root_variable(self, path: Path | str) -> VariablePath:
        """Return `path` as seen from the ``${SRCROOT}`` build variable."""
        return VariablePath(SRCROOT, self.relative(path))

    def absolute(self, relative: str) -> Path:
        """Re-anchor a string returned by relative() at the client root."""
        return Path(os.path.normpath(self.client_root / relative))

    @property
    def pods_root_relative(self) -> VariablePath:
        """The sandbox root expressed through ``${SRCROOT}``."""
        return self.relative_from_root_variable(self.sandbox_root)

    def definition_directory_relative(
        self, defined_in_file: Path | str | None
    ) -> VariablePath:
        """Directory of the declaring file expressed through ``${SRCROOT}``.

        Falls back to ``${PODS_ROOT}/..`` when the declaration has no
        backing file.
        """
        if defined_in_file is None:
            return PODFILE_DIR_FALLBACK
        return VariablePath(
            SRCROOT, PurePosixPath(self.relative(defined_in_file)).parent.as_posix()
        )
