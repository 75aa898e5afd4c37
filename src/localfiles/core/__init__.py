# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for localfiles.

This module collects the foundational classes and helpers used across the
localfiles codebase: configuration, the exception hierarchy, structured
logging, move outcomes and shared filesystem utilities.
"""
