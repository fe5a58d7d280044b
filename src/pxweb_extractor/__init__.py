"""Public package exports for the PX-Web extractor."""

from .client import PxWebExtractor
from .config import ExtractorConfig

__all__ = ["PxWebExtractor", "ExtractorConfig"]
