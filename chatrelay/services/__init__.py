"""Services layer: stream normalization and vendor providers."""

from .events import CanonicalEvent, ContentDelta, ReasoningDelta
from .normalizer import EventStream, NormalizerState, classify_fragment, normalize_stream

__all__ = [
    "CanonicalEvent",
    "ContentDelta",
    "EventStream",
    "NormalizerState",
    "ReasoningDelta",
    "classify_fragment",
    "normalize_stream",
]
