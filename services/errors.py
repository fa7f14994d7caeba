"""
Catalog Errors

Failure signals raised by the write path. Any of these means the enclosing
write was rolled back in full: no base row change and no aggregate or index
update was committed.
"""


class CatalogError(Exception):
    """Base class for write-path failures."""


class ConstraintViolation(CatalogError):
    """Uniqueness, check, foreign-key or hierarchy rule rejected the write."""


class MissingReference(CatalogError):
    """A referenced row does not exist; nothing was written."""


class MaintenanceError(CatalogError):
    """A dependent recompute or index rebuild failed and the write was undone."""
