"""
Prompt template API endpoints (admin only).
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_prompt_template_service
from api.middleware.admin import require_admin
from modules.admin.models import IdentityUser

from .interfaces import IPromptTemplateService
from .models import (
    CreatePromptTemplateRequest,
    PromptTemplate,
    PromptTemplateListResponse,
    UpdatePromptTemplateRequest,
)
from .exceptions import (
    InvalidTemplateError,
    SystemTemplateError,
    TemplateAccessDeniedError,
    TemplateNotFoundError,
)

router = APIRouter()


@router.get("", response_model=PromptTemplateListResponse)
async def list_templates(
    admin: IdentityUser = Depends(require_admin),
    service: IPromptTemplateService = Depends(get_prompt_template_service),
) -> PromptTemplateListResponse:
    """List all templates, the default one first."""
    return PromptTemplateListResponse(templates=await service.list_templates())


@router.post("", response_model=PromptTemplate, status_code=201)
async def create_template(
    request: CreatePromptTemplateRequest,
    admin: IdentityUser = Depends(require_admin),
    service: IPromptTemplateService = Depends(get_prompt_template_service),
) -> PromptTemplate:
    """
    Create a template.

    Variables are extracted from the prompt text. Creating a default
    template removes the default flag from all others.
    """
    try:
        return await service.create_template(admin.id, request)
    except InvalidTemplateError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/{template_id}", response_model=PromptTemplate)
async def get_template(
    template_id: str,
    admin: IdentityUser = Depends(require_admin),
    service: IPromptTemplateService = Depends(get_prompt_template_service),
) -> PromptTemplate:
    try:
        return await service.get_template(template_id)
    except TemplateNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")


@router.patch("/{template_id}", response_model=PromptTemplate)
async def update_template(
    template_id: str,
    request: UpdatePromptTemplateRequest,
    admin: IdentityUser = Depends(require_admin),
    service: IPromptTemplateService = Depends(get_prompt_template_service),
) -> PromptTemplate:
    """
    Update a template.

    System templates can be edited by any admin; user templates only by
    their author.
    """
    try:
        return await service.update_template(template_id, admin.id, request)
    except TemplateNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")
    except TemplateAccessDeniedError as e:
        raise HTTPException(status_code=403, detail=e.message)
    except InvalidTemplateError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: str,
    admin: IdentityUser = Depends(require_admin),
    service: IPromptTemplateService = Depends(get_prompt_template_service),
) -> None:
    """
    Delete a user template. System templates cannot be deleted.
    """
    try:
        await service.delete_template(template_id, admin.id)
    except TemplateNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")
    except (SystemTemplateError, TemplateAccessDeniedError) as e:
        raise HTTPException(status_code=403, detail=e.message)
