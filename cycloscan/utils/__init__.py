"""Utility functions for cycloscan."""

from cycloscan.utils.files import iter_translation_units

__all__ = ["iter_translation_units"]
