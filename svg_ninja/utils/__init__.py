"""
SVG Ninja - Utilities Package
=============================
This package contains utility modules for SVG Ninja.
"""

from svg_ninja.utils.logger import (
    JsonFormatter, setup_logger, get_logger, LogCapture, log_exception
)
from svg_ninja.utils.io import load_svg_bytes, save_svg_bytes, load_config

__all__ = [
    'JsonFormatter', 'setup_logger', 'get_logger', 'LogCapture',
    'log_exception', 'load_svg_bytes', 'save_svg_bytes', 'load_config'
]
