"""Label stock geometry — stock model number → pixel layout at 300 DPI."""
from __future__ import annotations
import logging

from .label_types import LabelProperties, Size

log = logging.getLogger(__name__)

DEFAULT_LABEL_NAME = "30346"

# label_name -> (top_margin, left_margin, label_count, total_lines, width, height)
LABEL_STOCKS: dict[str, tuple[int, int, int, int, int, int]] = {
    "30277": (10, 0, 2, 2, 900, 180),   # 9/16" x 3 7/16"
    "30346": (0, 0, 2, 3, 475, 175),    # 1/2" x 1 7/8"
}


def resolve_label_properties(label_name: str | None) -> LabelProperties:
    """Return the geometry for ``label_name``; unknown stocks use the default."""
    name = label_name or DEFAULT_LABEL_NAME
    stock = LABEL_STOCKS.get(name)
    if stock is None:
        log.debug("Unknown label stock %r, using %s geometry", name, DEFAULT_LABEL_NAME)
        stock = LABEL_STOCKS[DEFAULT_LABEL_NAME]
    top, left, count, total_lines, width, height = stock
    return LabelProperties(
        label_name=name,
        top_margin=top,
        left_margin=left,
        label_count=count,
        total_lines=total_lines,
        dimensions=Size(width, height),
    )


def list_label_stocks() -> list[LabelProperties]:
    return [resolve_label_properties(name) for name in LABEL_STOCKS]
