# SPDX-License-Identifier: MIT
"""Loading integration manifests."""
