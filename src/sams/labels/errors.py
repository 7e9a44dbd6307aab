"""Exceptions raised by the label composition and printing code."""


class LabelError(Exception):
    """Base exception for label operations."""


class EmptySheetError(LabelError, ValueError):
    """A sheet was requested with no images to place on it."""
