"""Utils module.

This module provides exceptions and small helpers shared across the package.
"""
