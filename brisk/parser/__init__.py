"""
Brisk CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import Argument
from .binder import ArgumentBinder, validate_arguments
from .flag import Flag
from .flag_kind import FlagKind
from .parser_types import ResolvedValues, ValueSource
from .registry import FlagRegistry
from .resolver import ValueResolver

__all__ = [
    "Argument",
    "ArgumentBinder",
    "validate_arguments",
    "Flag",
    "FlagKind",
    "FlagRegistry",
    "ResolvedValues",
    "ValueResolver",
    "ValueSource",
]
