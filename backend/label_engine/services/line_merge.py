"""Spill one long template value over two adjacent label lines.

Two neighbouring slots whose template ``content`` is identical are treated as
one logical field: whatever does not fit on the first line continues on the
second one, and anything past the second line is dropped.
"""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Callable

from .fonts import FontHandle, TextMeasurer
from .label_types import LabelContent, LineConfiguration, Margin, PartLabelTemplate, RENDER_DPI

log = logging.getLogger(__name__)

# Evaluated in order; a pair may consume text the next pair would see
MERGE_PAIRS = (("line1", "line2"), ("line2", "line3"), ("line3", "line4"))

FontFactory = Callable[[LineConfiguration, str], FontHandle]


def truncate_to_width(
    text: str,
    font: FontHandle,
    max_width: float,
    measurer: TextMeasurer,
    dpi: int = RENDER_DPI,
) -> str:
    """Drop trailing characters until ``text`` fits ``max_width``."""
    fitted = text
    while fitted and measurer.measure(fitted, font, dpi).width > max_width:
        fitted = fitted[:-1]
    return fitted


def split_text(
    text: str | None,
    first_font: FontHandle,
    second_font: Callable[[str], FontHandle],
    max_width: float,
    measurer: TextMeasurer,
    dpi: int = RENDER_DPI,
) -> tuple[str, str]:
    """Split ``text`` into a first line and its overflow line.

    ``second_font`` is called with the overflow text so the second line can
    size its own font.
    """
    description = (text or "").strip()
    first = truncate_to_width(description, first_font, max_width, measurer, dpi)
    second = ""
    if len(first) < len(description):
        remainder = description[len(first):].strip()
        second = truncate_to_width(remainder, second_font(remainder), max_width, measurer, dpi)
        if len(second) < len(remainder):
            log.debug("Dropped %d overflow characters", len(remainder) - len(second))
    return first, second


def merge_adjacent_lines(
    template: PartLabelTemplate,
    content: LabelContent,
    paper_width: int,
    margins: Margin,
    create_font: FontFactory,
    measurer: TextMeasurer,
    dpi: int = RENDER_DPI,
) -> LabelContent:
    available = paper_width - margins.right - margins.left
    for first_slot, second_slot in MERGE_PAIRS:
        first_line = getattr(template, first_slot)
        second_line = getattr(template, second_slot)
        if first_line.content != second_line.content:
            continue
        text = getattr(content, first_slot) or ""
        first, second = split_text(
            text,
            create_font(first_line, text),
            lambda remainder: create_font(second_line, remainder),
            available,
            measurer,
            dpi,
        )
        log.debug("Merged %s/%s: %r | %r", first_slot, second_slot, first, second)
        content = replace(content, **{first_slot: first, second_slot: second})
    return content
