# SPDX-License-Identifier: MIT
"""Support file generators for podagg."""

from podagg.generators.generator import BaseGenerator, Generator
from podagg.generators.xcconfig import XcconfigGenerator

__all__ = [
    "BaseGenerator",
    "Generator",
    "XcconfigGenerator",
]
