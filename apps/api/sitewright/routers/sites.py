"""API endpoints for generating and modifying sites."""

import logging

from fastapi import APIRouter, Depends

from ..core.gate import gate, require_idle_gate
from ..models import GenerateRequest, ModifyRequest, Project
from ..workflows import pipeline


logger = logging.getLogger(__name__)

router = APIRouter(tags=["sites"])


@router.post("/generate", response_model=Project, dependencies=[Depends(require_idle_gate)])
async def generate(body: GenerateRequest):
    """Generate a new single-page site from a prompt."""
    async with gate.session():
        return await pipeline.site_pipeline.generate(body.prompt)


@router.post("/modify", response_model=Project, dependencies=[Depends(require_idle_gate)])
async def modify(body: ModifyRequest):
    """Apply a modification prompt to a previously generated site."""
    async with gate.session():
        return await pipeline.site_pipeline.modify(
            str(body.previous_project_id),
            body.modification_prompt,
        )
