# SPDX-License-Identifier: MIT
"""Custom exceptions for podagg.

All podagg exceptions inherit from PodaggError. Errors are raised to the
immediate caller and never retried inside the core; recovery is up to the
installer driving it.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any


class PodaggError(Exception):
    """Base class for all podagg exceptions.

    Attributes:
        message: The error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(PodaggError):
    """Caller misuse of a target or its build configurations.

    Raised for unknown configuration names or targets constructed from
    an invalid target definition.
    """


class ConfigurationNotFoundError(ConfigurationError):
    """No build settings exist for the requested configuration.

    Attributes:
        target: Name of the target that was queried.
        configuration: The configuration that was requested.
        available: The configurations the target does know about.
    """

    def __init__(
        self,
        target: Any,
        configuration: str,
        available: Iterable[str],
    ) -> None:
        self.target = str(target)
        self.configuration = configuration
        self.available = list(available)
        super().__init__(
            f"{self.target} does not contain a build setting for the "
            f"{configuration!r} configuration, only {self.available!r}"
        )


class NoBuildSettingsError(ConfigurationError):
    """The target has no build configurations at all."""

    def __init__(self, target: Any) -> None:
        self.target = str(target)
        super().__init__(f"{self.target} does not contain any build settings")


class InvalidTargetDefinitionError(ConfigurationError):
    """An aggregate target was created without a usable target definition."""


class AmbiguousProductTypeError(PodaggError):
    """User targets disagree on their product type.

    Attributes:
        target: Name of the aggregate target being classified.
        product_types: Distinct product type names that were found.
    """

    def __init__(self, target: Any, product_types: Iterable[str]) -> None:
        self.target = str(target)
        self.product_types = list(product_types)
        found = ", ".join(self.product_types) or "none"
        super().__init__(
            f"Expected single kind of user_target for {self.target}. Found {found}."
        )


class InformativeError(PodaggError):
    """An error meant to be shown to the user as-is."""


class IntegrationTargetNotFoundError(InformativeError):
    """A user target UUID does not resolve inside the user project.

    UUIDs are recorded by the analysis pass, so a miss means the
    surrounding system is in an inconsistent state.

    Attributes:
        uuid: The UUID that could not be resolved.
        target: Name of the aggregate target integrating it.
    """

    def __init__(self, uuid: str, target: Any = None) -> None:
        self.uuid = uuid
        self.target = str(target) if target is not None else None
        owner = f" for the `{self.target}` integration library" if self.target else ""
        super().__init__(
            f"[Bug] Unable to find the target with the `{uuid}` UUID{owner}. "
            "Please report this issue."
        )


class ManifestError(PodaggError):
    """An integration manifest could not be loaded.

    Attributes:
        path: Path to the manifest file.
        reason: What was wrong with it.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")
