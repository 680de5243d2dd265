# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Brisk CLI applications."""
from rich.console import Console

from brisk.themes import get_brisk_theme

console = Console(color_system="truecolor", theme=get_brisk_theme())
