"""
AI Project Estimation Endpoint.

Estimates the workload and price of a web project from the questionnaire
answered by a freelance or a company.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from sassify.core.logging_config import get_logger
from sassify.core.models.io.estimations import EstimationRequest
from sassify.server.services.deps import get_openai_service
from sassify.server.services.errors import OpenAIServiceError
from sassify.server.services.openai_service import OpenAIService

logger = get_logger(__name__)

router = APIRouter(tags=["estimations"])


@router.post(
    "",
    summary="Estimate a Project",
    description=(
        "Build an estimation with the chat-completion API. The model is chosen from the project's complexity "
        "and identical requests are served from a 30 minute in-memory cache."
    ),
    response_description="The estimation JSON with an `optimization` block.",
    responses={
        200: {"description": "Estimation produced"},
        422: {"description": "Unknown user type or malformed body"},
        502: {"description": "The AI provider failed"},
    },
)
async def create_estimation(
    request: EstimationRequest,
    openai_service: OpenAIService = Depends(get_openai_service),
) -> Dict[str, Any]:
    try:
        return await openai_service.generate_estimation(request.project_data, request.user_type)
    except OpenAIServiceError as e:
        logger.error("Estimation failed: %s", e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
