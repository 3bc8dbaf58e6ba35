"""
Content reading utilities that handle plain and gzip-compressed SVG payloads.
"""
import gzip
import logging
import os
import zlib
from pathlib import Path
from typing import Union

from svg_ninja.core.errors import ErrorKind
from svg_ninja.core.models import DecodedSvg, Failure

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"

Source = Union[bytes, bytearray, memoryview, str, os.PathLike]


def is_gzip(data: bytes) -> bool:
    """Check for gzip framing by magic number."""
    return len(data) >= 2 and data[:2] == GZIP_MAGIC


class ContentReader:
    """
    Reads SVG and SVGZ content from bytes or from a file path.

    Gzip framing is detected from the magic number, so an SVGZ payload is
    recognised whatever its filename.
    """

    def read(self, source: Source) -> Union[DecodedSvg, Failure]:
        """
        Read and, when needed, decompress an SVG payload.

        Args:
            source: Raw content as bytes, or a path to a file

        Returns:
            DecodedSvg on success, otherwise a Failure
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            raw = bytes(source)
        else:
            raw = self._read_file(source)
            if isinstance(raw, Failure):
                return raw

        if not raw:
            return Failure(ErrorKind.EMPTY_CONTENT)

        if not is_gzip(raw):
            return DecodedSvg(raw, was_compressed=False)

        try:
            data = gzip.decompress(raw)
        except (OSError, EOFError, zlib.error) as e:
            logger.warning(f"Failed to decompress SVGZ payload: {e}")
            return Failure(ErrorKind.DECOMPRESSION_FAILURE, f"Could not decompress SVGZ content: {e}")

        if not data:
            return Failure(ErrorKind.EMPTY_CONTENT)

        logger.debug(f"Decompressed SVGZ payload: {len(raw)} -> {len(data)} bytes")
        return DecodedSvg(data, was_compressed=True)

    def _read_file(self, path: Union[str, os.PathLike]) -> Union[bytes, Failure]:
        path = Path(path)

        if not path.is_file():
            return Failure(ErrorKind.IO_ERROR, f"SVG file not found or not a regular file: {path}")

        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            logger.error(f"Error reading SVG file {path}: {e}")
            return Failure(ErrorKind.IO_ERROR, f"Could not read SVG file {path}: {e}")
