"""
Input/output utilities for loading and saving SVG files and configuration.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

logger = logging.getLogger(__name__)


def load_svg_bytes(file_path: Union[str, Path]) -> bytes:
    """
    Load raw SVG or SVGZ content from a file.

    Args:
        file_path: Path to the SVG file

    Returns:
        File content as bytes, compressed or not
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"SVG file not found: {file_path}")

    try:
        with open(file_path, 'rb') as f:
            return f.read()
    except OSError as e:
        logger.error(f"Error loading SVG file {file_path}: {e}")
        raise


def save_svg_bytes(
    content: bytes,
    output_path: Union[str, Path],
    create_dirs: bool = True
) -> int:
    """
    Save processed SVG content to a file.

    Args:
        content: Processed content as bytes
        output_path: Path to save the SVG
        create_dirs: Whether to create parent directories if they don't exist

    Returns:
        Number of bytes written
    """
    output_path = Path(output_path)

    if create_dirs:
        output_path.parent.mkdir(exist_ok=True, parents=True)

    try:
        with open(output_path, 'wb') as f:
            written = f.write(content)
        logger.info(f"SVG saved to: {output_path} ({written} bytes)")
        return written
    except OSError as e:
        logger.error(f"Error saving SVG to {output_path}: {e}")
        raise


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        Dictionary containing configuration
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading configuration from {config_path}: {e}")
        raise

    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {config_path} must be a JSON object")
    return config
