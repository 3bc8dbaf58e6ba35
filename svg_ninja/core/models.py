"""
Data Model Module
=================
This module defines the transient values passed between pipeline components.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from svg_ninja.core.errors import ErrorKind, SvgNinjaError

SVG_MIME_TYPE = "image/svg+xml"
DEFAULT_DIMENSION = 300
THUMBNAIL_SIZE = 150


class PipelineState(Enum):
    """States an upload moves through in the pipeline."""
    RECEIVED = "received"
    VALIDATED = "validated"
    METADATA_STRIPPED = "metadata_stripped"
    VIEWBOX_NORMALIZED = "viewbox_normalized"
    RECOMPRESSED = "recompressed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Failure:
    """A failure reported as a value rather than raised."""
    kind: ErrorKind
    message: str = ""

    def __post_init__(self):
        if not self.message:
            object.__setattr__(self, "message", self.kind.default_message)

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class RawUpload:
    """Bytes of an upload together with what the client claimed about them."""
    content: bytes
    filename: str = ""
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class DecodedSvg:
    """Decompressed candidate XML, not yet validated."""
    data: bytes
    was_compressed: bool = False

    @property
    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ThumbnailBox:
    """Thumbnail size fitted into a square box."""
    width: int
    height: int


@dataclass(frozen=True)
class Dimensions:
    """Display size of an SVG document."""
    width: int = DEFAULT_DIMENSION
    height: int = DEFAULT_DIMENSION
    is_default: bool = False

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Dimensions must be positive, got {self.width}x{self.height}")

    @classmethod
    def default(cls) -> "Dimensions":
        return cls(DEFAULT_DIMENSION, DEFAULT_DIMENSION, is_default=True)

    @property
    def ratio(self) -> float:
        return self.width / self.height

    @property
    def orientation(self) -> str:
        return "landscape" if self.width >= self.height else "portrait"

    def as_tuple(self) -> Tuple[int, int]:
        return self.width, self.height


@dataclass(frozen=True)
class ProcessedBytes:
    """Final content of an accepted upload, ready to persist."""
    content: bytes
    compressed: bool = False
    states: Tuple[PipelineState, ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def ok(self) -> bool:
        return True


PipelineResult = Union[ProcessedBytes, Failure]


def is_failure(value) -> bool:
    """Check whether a component returned a failure value."""
    return isinstance(value, Failure)


def unwrap(value):
    """Return a successful value, raising SvgNinjaError for a failure."""
    if isinstance(value, Failure):
        raise SvgNinjaError(value)
    return value
