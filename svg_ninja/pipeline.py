"""
Upload Pipeline Module
======================
This module runs an uploaded SVG or SVGZ file through validation, metadata
stripping, viewBox normalization and recompression before it is stored.
"""

import gzip
import logging
import os
import threading
import time
import zlib
from typing import Callable, Dict, List, Optional, Tuple, Union

from svg_ninja.config import PipelineSettings
from svg_ninja.core.errors import ErrorKind
from svg_ninja.core.models import (
    SVG_MIME_TYPE, Dimensions, Failure, PipelineResult, PipelineState,
    ProcessedBytes, RawUpload, is_failure
)
from svg_ninja.core.reader import ContentReader, Source, is_gzip
from svg_ninja.core.validator import SVGValidator
from svg_ninja.core.xml_guard import XmlGuard
from svg_ninja.processing.dimensions import DimensionResolver
from svg_ninja.processing.metadata import MetadataStripper
from svg_ninja.processing.viewbox import ViewBoxNormalizer

logger = logging.getLogger(__name__)

SVG_EXTENSIONS = ("svg", "svgz")


def file_extension(filename: Optional[str]) -> str:
    """Lower-cased extension of a filename, without the dot."""
    if not filename:
        return ""
    return os.path.splitext(filename)[1].lstrip(".").lower()


def is_svg_payload(filename: Optional[str], declared_mime: Optional[str]) -> bool:
    """
    Decide whether an upload should go through the SVG pipeline.

    Args:
        filename: Declared filename
        declared_mime: Declared mime type

    Returns:
        True for the SVG mime type or an ``.svg``/``.svgz`` extension
    """
    if declared_mime and declared_mime.strip().lower() == SVG_MIME_TYPE:
        return True
    return file_extension(filename) in SVG_EXTENSIONS


def is_svgz_upload(filename: Optional[str], content: bytes = b"") -> bool:
    """An upload is SVGZ if named ``.svgz`` or framed as gzip."""
    return file_extension(filename) == "svgz" or is_gzip(content)


def allowed_mime_types(
    mimes: Dict[str, str],
    admin_only: bool = True,
    is_authorized: bool = False,
) -> Dict[str, str]:
    """
    Add SVG and SVGZ to a host's extension -> mime map, respecting admin-only mode.

    Args:
        mimes: Existing extension to mime type mapping
        admin_only: Whether SVG uploads are restricted
        is_authorized: Whether the current actor holds the upload capability

    Returns:
        A new mapping
    """
    result = dict(mimes)
    if admin_only and not is_authorized:
        for extension in SVG_EXTENSIONS:
            result.pop(extension, None)
        return result

    for extension in SVG_EXTENSIONS:
        result[extension] = SVG_MIME_TYPE
    return result


class ProcessedNotice:
    """
    One-shot flag telling the host a processed upload should be announced.

    The flag expires after ``ttl`` seconds if nobody consumes it.
    """

    def __init__(self, ttl: float = 30, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._expires_at: Optional[float] = None

    def set(self) -> None:
        with self._lock:
            self._expires_at = self._clock() + self.ttl

    def is_pending(self) -> bool:
        with self._lock:
            return self._expires_at is not None and self._clock() < self._expires_at

    def consume(self) -> bool:
        """Return True once for a pending notice and clear it."""
        with self._lock:
            pending = self._expires_at is not None and self._clock() < self._expires_at
            self._expires_at = None
            return pending


class UploadPipeline:
    """
    Processes SVG uploads before they are persisted.

    Steps, in order:
    1. Classify the upload as SVG/SVGZ
    2. Check upload permission
    3. Read and decompress the content
    4. Validate the document
    5. Strip metadata (optional, best effort)
    6. Add a missing viewBox (best effort)
    7. Re-compress SVGZ uploads
    """

    def __init__(
        self,
        settings: Optional[PipelineSettings] = None,
        authorizer: Optional[Callable[[str], bool]] = None,
        notice: Optional[ProcessedNotice] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            settings: Host-owned processing flags
            authorizer: Predicate answering "may the current actor do <capability>?"
            notice: One-shot flag set after each accepted upload
        """
        self.settings = settings or PipelineSettings()
        self.authorizer = authorizer
        self.notice = notice or ProcessedNotice(ttl=self.settings.notice_ttl)

        self.reader = ContentReader()
        self.validator = SVGValidator(XmlGuard(remove_comments=True))
        self.stripper = MetadataStripper(XmlGuard(remove_comments=True))
        self.normalizer = ViewBoxNormalizer(XmlGuard())

    def is_authorized(self) -> bool:
        if not self.settings.admin_only:
            return True
        if self.authorizer is None:
            return False
        return bool(self.authorizer(self.settings.upload_capability))

    def process(self, upload: RawUpload) -> PipelineResult:
        """
        Run an upload through the pipeline.

        Args:
            upload: The raw upload

        Returns:
            ProcessedBytes on acceptance, otherwise a Failure
        """
        states: List[PipelineState] = [PipelineState.RECEIVED]

        if not is_svg_payload(upload.filename, upload.mime_type):
            logger.debug(f"Not an SVG upload, skipping: {upload.filename!r}")
            return Failure(ErrorKind.UNSUPPORTED_TYPE)

        if not self.is_authorized():
            return self._reject(upload, Failure(ErrorKind.PERMISSION_DENIED))

        decoded = self.reader.read(upload.content)
        if is_failure(decoded):
            return self._reject(upload, decoded)

        is_valid, reason = self.validator.check(decoded.data)
        if not is_valid:
            message = f"{ErrorKind.INVALID_SVG.default_message} {reason}"
            return self._reject(upload, Failure(ErrorKind.INVALID_SVG, message))
        content = decoded.data
        states.append(PipelineState.VALIDATED)

        if self.settings.strip_metadata:
            stripped = self.stripper.strip(content)
            if is_failure(stripped):
                logger.warning(
                    f"Metadata stripping failed for {upload.filename!r}, keeping original content: "
                    f"{stripped.message}"
                )
            else:
                content = stripped
                states.append(PipelineState.METADATA_STRIPPED)

        content = self.normalizer.ensure_viewbox(content)
        states.append(PipelineState.VIEWBOX_NORMALIZED)

        compressed = is_svgz_upload(upload.filename, upload.content)
        if compressed:
            packed = self._compress(content)
            if is_failure(packed):
                return self._reject(upload, packed)
            content = packed
            states.append(PipelineState.RECOMPRESSED)

        states.append(PipelineState.ACCEPTED)
        logger.info(f"Processed SVG upload {upload.filename!r}: {len(upload.content)} -> {len(content)} bytes")

        self.notice.set()
        return ProcessedBytes(content, compressed=compressed, states=tuple(states))

    def _compress(self, content: bytes) -> Union[bytes, Failure]:
        try:
            return gzip.compress(content, compresslevel=self.settings.compression_level, mtime=0)
        except (OSError, ValueError, zlib.error) as e:
            logger.error(f"Failed to compress processed SVG: {e}")
            return Failure(ErrorKind.COMPRESSION_FAILURE)

    def _reject(self, upload: RawUpload, failure: Failure) -> Failure:
        logger.warning(f"Rejected SVG upload {upload.filename!r} ({failure.kind.value}): {failure.message}")
        return failure


def process_upload(
    raw_bytes: bytes,
    filename: str,
    declared_mime: Optional[str],
    is_authorized: bool,
    strip_enabled: bool,
    notice: Optional[ProcessedNotice] = None,
) -> PipelineResult:
    """
    Process one SVG upload.

    Args:
        raw_bytes: Uploaded content
        filename: Declared filename
        declared_mime: Declared mime type
        is_authorized: Whether the host allows the current actor to upload SVGs
        strip_enabled: Whether to strip design-tool metadata
        notice: Optional one-shot flag set on success

    Returns:
        ProcessedBytes on acceptance, otherwise a Failure
    """
    pipeline = UploadPipeline(
        settings=PipelineSettings(admin_only=True, strip_metadata=strip_enabled),
        authorizer=lambda capability: is_authorized,
        notice=notice,
    )
    return pipeline.process(RawUpload(raw_bytes, filename, declared_mime))


def resolve_dimensions(raw_bytes_or_path: Source) -> Dimensions:
    """Resolve display dimensions of an SVG or SVGZ, 300x300 when unknown."""
    return DimensionResolver().resolve(raw_bytes_or_path)


def detect_svg_type(filename: str, content: Source) -> Optional[Tuple[str, str]]:
    """
    Identify an SVG upload whose type the host could not determine.

    Args:
        filename: Declared filename
        content: Raw bytes or a path to the uploaded file

    Returns:
        (extension, mime type) when the file is a valid SVG/SVGZ, else None
    """
    extension = file_extension(filename)
    if extension not in SVG_EXTENSIONS:
        return None

    decoded = ContentReader().read(content)
    if is_failure(decoded):
        return None

    if not SVGValidator().validate(decoded.data):
        return None
    return extension, SVG_MIME_TYPE


def describe_attachment(url: str, raw_bytes_or_path: Source) -> Dict:
    """Display metadata (image, thumb, sizes) for a stored SVG attachment."""
    return DimensionResolver().describe_attachment(url, raw_bytes_or_path)
