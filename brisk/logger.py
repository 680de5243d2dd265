# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Brisk CLI applications."""
import logging

logger: logging.Logger = logging.getLogger("brisk")
