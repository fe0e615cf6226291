# SPDX-License-Identifier: MIT
"""Core target model: pod targets, aggregate targets and their settings."""
