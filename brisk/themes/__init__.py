"""
Brisk CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .colors import OneColors, get_brisk_theme, get_prompt_style, stylize

__all__ = [
    "OneColors",
    "get_brisk_theme",
    "get_prompt_style",
    "stylize",
]
