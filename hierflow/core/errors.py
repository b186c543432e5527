"""Errors raised to callers of the hierflow core."""


class ImportValidationError(ValueError):
    """A document handed to an importer is malformed. No graph state was built."""
    pass
