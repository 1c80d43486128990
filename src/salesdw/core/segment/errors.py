# core/segment/errors.py
"""Exceptions raised by the segmentation components."""


class SegmentationError(ValueError):
    """Base class for input or configuration integrity errors."""


class DuplicateEntityError(SegmentationError):
    """An entity id appears more than once in the input."""

    def __init__(self, duplicates):
        self.duplicates = list(duplicates)
        preview = ", ".join(repr(d) for d in self.duplicates[:5])
        if len(self.duplicates) > 5:
            preview += ", ..."
        super().__init__(f"❌ Duplicate entity ids: {preview}")


class InvalidTierDefinitionError(SegmentationError):
    """Tier thresholds are empty, out of range or not strictly decreasing."""


class InvalidMeasureError(SegmentationError):
    """An entity measure is missing or not a finite number."""
