"""Pydantic schemas for API request/response models."""
from __future__ import annotations
from pydantic import BaseModel
from typing import Any, Optional

from ..services.label_types import LabelPosition


class MarginSchema(BaseModel):
    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0


class LineConfigurationSchema(BaseModel):
    content: str = ""
    label: int = 1
    position: LabelPosition = LabelPosition.LEFT
    margin: MarginSchema = MarginSchema()
    font_name: Optional[str] = None
    font_size: float = 8.0
    auto_size: bool = False
    rotate: int = 0
    barcode: bool = False
    upper_case: bool = False
    lower_case: bool = False


class PartLabelTemplateSchema(BaseModel):
    line1: LineConfigurationSchema = LineConfigurationSchema()
    line2: LineConfigurationSchema = LineConfigurationSchema()
    line3: LineConfigurationSchema = LineConfigurationSchema()
    line4: LineConfigurationSchema = LineConfigurationSchema()
    identifier: LineConfigurationSchema = LineConfigurationSchema()


class PrinterOptionsSchema(BaseModel):
    label_name: Optional[str] = None   # stock model number, e.g. "30346"
    show_diagnostic: bool = False
    generate_image_only: bool = False


class LinesRenderRequest(BaseModel):
    lines: list[LineConfigurationSchema]
    options: PrinterOptionsSchema = PrinterOptionsSchema()


class PartLabelRequest(BaseModel):
    part: dict[str, Any] = {}
    line1: Optional[str] = None
    line2: Optional[str] = None
    line3: Optional[str] = None
    line4: Optional[str] = None
    identifier: Optional[str] = None
    template: Optional[PartLabelTemplateSchema] = None
    options: PrinterOptionsSchema = PrinterOptionsSchema()


class RenderResponse(BaseModel):
    image: str
    printed: bool


class LabelStockSchema(BaseModel):
    label_name: str
    width: int
    height: int
    label_count: int
    top_margin: int
    left_margin: int
    total_lines: int
