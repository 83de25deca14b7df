"""Render errors — everything here aborts the whole render call."""
from __future__ import annotations


class LabelRenderError(Exception):
    """Base class for errors raised while composing a label image."""


class InvalidArgumentError(LabelRenderError, ValueError):
    pass


class OutOfRangeLabelIndexError(InvalidArgumentError, IndexError):
    def __init__(self, label: int, label_count: int):
        super().__init__(
            f"Label index {label} is outside the sheet (valid: 1..{label_count})"
        )
        self.label = label
        self.label_count = label_count


class MissingPropertyError(LabelRenderError, AttributeError):
    def __init__(self, property_name: str, data: object):
        super().__init__(
            f"Template property '{property_name}' not found on {type(data).__name__}"
        )
        self.property_name = property_name


class BarcodeEncodingError(LabelRenderError):
    pass
