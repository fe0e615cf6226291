# SPDX-License-Identifier: MIT
"""Xcode product types and user target classification.

An aggregate target integrates with one or more native targets of the
user project. How the pods are linked and embedded depends on what
those targets produce, so all of them must agree on a single product
type.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from podagg.core.errors import AmbiguousProductTypeError

logger = logging.getLogger(__name__)


class ProductType(Enum):
    """Native target product types, valued by their Xcode identifier.

    UNKNOWN stands for every identifier not listed here. All unrecognized
    identifiers count as one and the same kind.
    """

    UNKNOWN = ""
    APPLICATION = "com.apple.product-type.application"
    ON_DEMAND_INSTALL_CAPABLE_APPLICATION = (
        "com.apple.product-type.application.on-demand-install-capable"
    )
    FRAMEWORK = "com.apple.product-type.framework"
    STATIC_FRAMEWORK = "com.apple.product-type.framework.static"
    DYNAMIC_LIBRARY = "com.apple.product-type.library.dynamic"
    STATIC_LIBRARY = "com.apple.product-type.library.static"
    BUNDLE = "com.apple.product-type.bundle"
    OCUNIT_TEST_BUNDLE = "com.apple.product-type.bundle.ocunit-test"
    UNIT_TEST_BUNDLE = "com.apple.product-type.bundle.unit-test"
    UI_TEST_BUNDLE = "com.apple.product-type.bundle.ui-testing"
    APP_EXTENSION = "com.apple.product-type.app-extension"
    COMMAND_LINE_TOOL = "com.apple.product-type.tool"
    WATCH_APP = "com.apple.product-type.application.watchapp"
    WATCH2_APP = "com.apple.product-type.application.watchapp2"
    WATCH2_APP_CONTAINER = "com.apple.product-type.application.watchapp2-container"
    WATCH_EXTENSION = "com.apple.product-type.watchkit-extension"
    WATCH2_EXTENSION = "com.apple.product-type.watchkit2-extension"
    TV_EXTENSION = "com.apple.product-type.tv-app-extension"
    MESSAGES_APPLICATION = "com.apple.product-type.application.messages"
    MESSAGES_EXTENSION = "com.apple.product-type.app-extension.messages"
    STICKER_PACK = "com.apple.product-type.app-extension.messages-sticker-pack"
    XPC_SERVICE = "com.apple.product-type.xpc-service"
    DRIVER_EXTENSION = "com.apple.product-type.driver-extension"
    SYSTEM_EXTENSION = "com.apple.product-type.system-extension"
    EXTENSIONKIT_EXTENSION = "com.apple.product-type.extensionkit-extension"
    INSTRUMENTS_PACKAGE = "com.apple.product-type.instruments-package"
    METAL_LIBRARY = "com.apple.product-type.metal-library"

    @classmethod
    def from_identifier(cls, identifier: str) -> ProductType:
        """Parse an Xcode product type identifier.

        Identifiers this module does not know map to UNKNOWN.
        """
        identifier = identifier.strip('"')
        try:
            return cls(identifier)
        except ValueError:
            logger.debug("Unrecognized product type %s", identifier)
            return cls.UNKNOWN

    @property
    def symbol(self) -> str:
        """Short name, e.g. "app_extension"."""
        return self.name.lower()


LIBRARY_PRODUCT_TYPES = frozenset(
    {
        ProductType.FRAMEWORK,
        ProductType.DYNAMIC_LIBRARY,
        ProductType.STATIC_LIBRARY,
    }
)

# Product types whose pod frameworks must be embedded by a host target
EMBED_FRAMEWORKS_IN_HOST_TARGET_TYPES = frozenset(
    {
        ProductType.APP_EXTENSION,
        ProductType.FRAMEWORK,
        ProductType.STATIC_LIBRARY,
        ProductType.MESSAGES_EXTENSION,
        ProductType.WATCH_EXTENSION,
        ProductType.XPC_SERVICE,
    }
)


@dataclass(frozen=True)
class ProductTypeResolution:
    """Outcome of reducing user target product types to a single kind.

    Either `product_type` is set (exactly one kind was found) or the
    resolution is ambiguous and `found` lists every distinct kind.
    """

    product_type: ProductType | None
    found: tuple[ProductType, ...]

    @property
    def ambiguous(self) -> bool:
        return self.product_type is None

    def unwrap(self, owner: object) -> ProductType:
        """Return the single product type or raise for `owner`.

        Raises:
            AmbiguousProductTypeError: If zero or several kinds were found.
        """
        if self.product_type is None:
            raise AmbiguousProductTypeError(owner, [t.symbol for t in self.found])
        return self.product_type


def classify_product_types(product_types: Iterable[ProductType]) -> ProductTypeResolution:
    """Reduce product types to a single kind.

    The distinct kinds are kept in first-seen order for error reporting.
    """
    found = tuple(dict.fromkeys(product_types))
    if len(found) == 1:
        return ProductTypeResolution(found[0], found)
    return ProductTypeResolution(None, found)
