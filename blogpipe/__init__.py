"""Build-time content pipeline for a static blog."""
from .errors import (
    BuildError,
    ConfigError,
    DateParseError,
    DuplicatePathError,
    FeedGenerationError,
    MetadataError,
)
from .posts import Post, extract
from .registry import Registry
from .tags import TagIndex

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "ConfigError",
    "DateParseError",
    "DuplicatePathError",
    "FeedGenerationError",
    "MetadataError",
    "Post",
    "Registry",
    "TagIndex",
    "extract",
]
