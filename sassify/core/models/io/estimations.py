"""Estimation request model for the AI estimation endpoint."""

from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field


class EstimationRequest(BaseModel):
    """A project description to estimate for a freelance or a company."""

    user_type: Literal["freelance", "entreprise"] = Field(description="Audience of the estimation")
    project_data: Dict[str, Any] = Field(
        default_factory=dict,
        description="Project description: projectType, technologies, features, constraints, pricing, ...",
    )
