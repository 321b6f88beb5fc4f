"""Home page response model."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel

from .plans import PlanRead


class HomeResponse(BaseModel):
    page_title: str
    meta_description: str
    plans: List[PlanRead]
    projects_data: Dict[str, Any]
