"""HTTP routes for animation requests."""

from __future__ import annotations

import logging
import uuid

import structlog
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse

from .animation_errors import ValidationError
from .animation_models import RequestStage
from .animation_schemas import AnimationErrorSchema, AnimationResponse
from .animation_service import AnimationService

router = APIRouter(tags=["animation"])
logger = logging.getLogger(__name__)

INVALID_COUNT_MESSAGE = "Two images are required"
GENERATION_FAILED_MESSAGE = "Failed to generate animation"


def get_animation_service(request: Request) -> AnimationService:
    """Fetch animation service from application state."""
    try:
        return request.app.state.animation_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - wiring error
        raise RuntimeError("AnimationService is not configured") from exc


@router.post(
    "/animate",
    response_model=AnimationResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": AnimationErrorSchema},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": AnimationErrorSchema},
    },
)
async def animate(
    images: list[UploadFile] | None = File(None),
    animation_type: str | None = Form(None, alias="animationType"),
    service: AnimationService = Depends(get_animation_service),
) -> JSONResponse:
    """Relay two images to the provider and return the stored artifact path."""
    uploads = images or []
    with structlog.contextvars.bound_contextvars(request_id=uuid.uuid4().hex):
        try:
            result = await service.generate(uploads, animation_type)
        except ValidationError:
            return _error(status.HTTP_400_BAD_REQUEST, INVALID_COUNT_MESSAGE)
        except Exception:
            logger.exception(
                "animate.failed",
                extra={"stage": RequestStage.FAILED.value, "image_count": len(uploads)},
            )
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERATION_FAILED_MESSAGE)

        service.stage_log.info("animate.stage", stage=RequestStage.RESPONDED.value)
        body = AnimationResponse(
            animationUrl=result.animation_url, serviceUsed=result.service_used
        )
        return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump())


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=AnimationErrorSchema(error=message).model_dump(),
    )
