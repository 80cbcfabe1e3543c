from pathlib import Path
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import Response

from coverie.core.config import Settings, get_settings
from coverie.schemas.cover_schemas import FormValidation, default_form_values, validate_cover_page
from coverie.services.cover_generator import render_cover_pdf_bytes
from coverie.services.cover_preview import CoverPreview, render_cover_preview
from coverie.services.dependencies import get_input_validator
from coverie.services.validation_gateway import (
    GatewayFailure,
    GatewaySuccess,
    InputValidator,
    build_validation_request,
    validate_inputs_action,
)


router = APIRouter(prefix="/cover", tags=["Cover Page"])


def _cwd_path(p: Optional[str]) -> Optional[Path]:
    return Path(p).resolve() if p else None


def _valid_or_422(values: Dict[str, Any]) -> FormValidation:
    result = validate_cover_page(values)
    if not result.valid:
        raise HTTPException(
            status_code=422,
            detail={"message": "Cover page form has invalid fields", "errors": result.errors},
        )
    return result


@router.get("/defaults")
def get_defaults():
    return default_form_values()


@router.post("/validate", response_model=FormValidation)
def validate_form(values: Dict[str, Any] = Body(...)):
    # field errors are a normal outcome here, not an HTTP error
    return validate_cover_page(values)


@router.post("/preview")
def preview_cover(
    values: Dict[str, Any] = Body(...),
    settings: Settings = Depends(get_settings),
):
    preview: CoverPreview = render_cover_preview(values, settings.institution_name)
    return preview.to_dict()


@router.post("/pdf")
def export_cover_pdf(
    values: Dict[str, Any] = Body(...),
    settings: Settings = Depends(get_settings),
):
    preview = render_cover_preview(values, settings.institution_name)
    pdf = render_cover_pdf_bytes(
        preview,
        font_path=_cwd_path(settings.cover_font_path),
        bold_font_path=_cwd_path(settings.cover_bold_font_path),
    )
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="cover-page.pdf"'},
    )


@router.post("/ai-validate", response_model=Union[GatewaySuccess, GatewayFailure])
async def ai_validate_cover(
    values: Dict[str, Any] = Body(...),
    settings: Settings = Depends(get_settings),
    validator: InputValidator = Depends(get_input_validator),
):
    data = _valid_or_422(values).data
    request = build_validation_request(data, settings.institution_name)
    return await validate_inputs_action(request, validator)
