"""Label rendering API router."""
from __future__ import annotations
from fastapi import APIRouter, HTTPException

from ..errors import LabelRenderError
from ..models.schemas import LabelStockSchema, LinesRenderRequest, PartLabelRequest, RenderResponse
from ..services.printer_service import (
    build_label_content, build_line_configuration, build_printer_options, build_template,
    get_renderer, image_to_data_url,
)
from ..services.stocks import list_label_stocks

router = APIRouter(prefix="/api", tags=["label"])


@router.post("/label/preview", response_model=RenderResponse)
async def preview_label(req: LinesRenderRequest):
    """Render a line list and return PNG as base64, without printing."""
    options = build_printer_options(req.options, image_only=True)
    lines = [build_line_configuration(line) for line in req.lines]
    try:
        image = get_renderer().render_from_lines(lines, options)
    except LabelRenderError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RenderResponse(image=image_to_data_url(image), printed=False)


@router.post("/label/print", response_model=RenderResponse)
async def print_label(req: LinesRenderRequest):
    """Render a line list and send it to the printer."""
    options = build_printer_options(req.options)
    lines = [build_line_configuration(line) for line in req.lines]
    try:
        image = get_renderer().render_from_lines(lines, options)
    except LabelRenderError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RenderResponse(image=image_to_data_url(image), printed=not options.generate_image_only)


@router.post("/label/part", response_model=RenderResponse)
async def part_label(req: PartLabelRequest):
    """Render a part label from the part template (or the template in the request)."""
    options = build_printer_options(req.options)
    template = build_template(req.template) if req.template is not None else None
    try:
        image = get_renderer().render_from_template(build_label_content(req), options, template)
    except LabelRenderError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RenderResponse(image=image_to_data_url(image), printed=not options.generate_image_only)


@router.get("/label/stocks", response_model=list[LabelStockSchema])
async def label_stocks():
    """List supported label stocks."""
    return [
        LabelStockSchema(
            label_name=p.label_name,
            width=p.dimensions.width,
            height=p.dimensions.height,
            label_count=p.label_count,
            top_margin=p.top_margin,
            left_margin=p.left_margin,
            total_lines=p.total_lines,
        )
        for p in list_label_stocks()
    ]


@router.get("/fonts")
async def get_fonts():
    """List available fonts."""
    return {"fonts": get_renderer().registry.family_names()}
