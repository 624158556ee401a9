"""Errors raised by the build pipeline.

Every error is fatal to the build. The driver catches BuildError, reports
str(error) and exits non-zero, so messages name the offending document and
the violated constraint.
"""


class BuildError(Exception):
    """Base class for every error the pipeline raises."""


class ConfigError(BuildError):
    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class DateParseError(BuildError):
    """A value is not a YYYY-MM-DD calendar date."""

    def __init__(self, raw):
        self.raw = raw
        super().__init__(f"not a YYYY-MM-DD calendar date: {raw!r}")


class MetadataError(BuildError):
    """A required field is missing or a field failed validation.

    reason is "missing" or "invalid".
    """

    MISSING = "missing"
    INVALID = "invalid"

    def __init__(self, document_path: str, field_name: str, reason: str):
        self.document_path = document_path
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"{document_path}: field '{field_name}' is {reason}")


class DuplicatePathError(BuildError):
    def __init__(self, path: str, document_path_a: str, document_path_b: str):
        self.path = path
        self.document_path_a = document_path_a
        self.document_path_b = document_path_b
        super().__init__(
            f"{document_path_a} and {document_path_b} both resolve to {path}"
        )


class FeedGenerationError(BuildError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"feed generation failed: {reason}")
