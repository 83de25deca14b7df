"""Label layout types — line templates, content slots, sheet geometry."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional

RENDER_DPI = 300
POINTS_PER_INCH = 72

# Fixed drawing order for template mode
SLOT_NAMES = ("line1", "line2", "line3", "line4", "identifier")


class LabelPosition(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class LabelSource(str, Enum):
    AUTO = "auto"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Margin:
    left: int = 0
    right: int = 0
    top: int = 0
    bottom: int = 0


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class LineConfiguration:
    """How one line of text (or a barcode) is placed on the sheet."""
    content: str = ""
    label: int = 1              # 1-based physical label on the sheet
    position: LabelPosition = LabelPosition.LEFT
    margin: Margin = field(default_factory=Margin)
    font_name: str | None = None
    font_size: float = 8.0      # points
    auto_size: bool = False
    rotate: int = 0             # degrees clockwise, 0 = none
    barcode: bool = False
    upper_case: bool = False
    lower_case: bool = False


@dataclass(frozen=True)
class PartLabelTemplate:
    line1: LineConfiguration = field(default_factory=LineConfiguration)
    line2: LineConfiguration = field(default_factory=LineConfiguration)
    line3: LineConfiguration = field(default_factory=LineConfiguration)
    line4: LineConfiguration = field(default_factory=LineConfiguration)
    identifier: LineConfiguration = field(default_factory=LineConfiguration)

    def slots(self) -> Iterator[tuple[str, LineConfiguration]]:
        for name in SLOT_NAMES:
            yield name, getattr(self, name)


@dataclass(frozen=True)
class LabelContent:
    """Slot values for one part label; ``None`` slots are filled from the template."""
    part: Any = None
    line1: Optional[str] = None
    line2: Optional[str] = None
    line3: Optional[str] = None
    line4: Optional[str] = None
    identifier: Optional[str] = None

    def is_empty(self) -> bool:
        return self.part is None and all(getattr(self, name) is None for name in SLOT_NAMES)


@dataclass(frozen=True)
class LabelProperties:
    label_name: str
    top_margin: int
    left_margin: int
    label_count: int
    total_lines: int
    dimensions: Size    # one physical label, in device pixels

    def __post_init__(self):
        if self.label_count < 1:
            raise ValueError("label_count must be at least 1")


@dataclass(frozen=True)
class PrinterOptions:
    label_name: str | None = None
    show_diagnostic: bool = False
    generate_image_only: bool = False


@dataclass(frozen=True)
class PrinterSettings:
    printer_name: str = "Dymo LabelWriter 450 Twin Turbo"
    label_name: str = "30346"
    label_source: LabelSource = LabelSource.AUTO
    part_label_template: PartLabelTemplate = field(default_factory=lambda: DEFAULT_PART_LABEL_TEMPLATE)


# Part number on top, description spilling over two lines, barcode below and
# the bin number running down the right edge.
DEFAULT_PART_LABEL_TEMPLATE = PartLabelTemplate(
    line1=LineConfiguration(
        content="{partNumber}", position=LabelPosition.CENTER,
        font_size=16, auto_size=True, upper_case=True,
    ),
    line2=LineConfiguration(content="{description}", font_size=8),
    line3=LineConfiguration(content="{description}", font_size=8),
    line4=LineConfiguration(content="{partNumber}", font_size=8, barcode=True),
    identifier=LineConfiguration(
        content="{binNumber}", position=LabelPosition.RIGHT,
        font_size=6, rotate=90, upper_case=True,
    ),
)
