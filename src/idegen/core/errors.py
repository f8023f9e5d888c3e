"""idegen error types."""

from __future__ import annotations


class IdegenError(Exception):
    """Base exception for idegen."""

    pass


class MissingFieldError(IdegenError):
    """A builder was finalized without a required field."""

    def __init__(self, descriptor: str, field: str):
        self.descriptor = descriptor
        self.field = field
        super().__init__(f"{descriptor} missing {field}")


class UnsupportedConfigurationError(IdegenError):
    """An IDE backend cannot represent the given project."""

    pass
