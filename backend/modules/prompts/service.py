"""
Prompt template service implementation.
"""

import logging
from typing import Any

from .interfaces import IPromptTemplateService
from .models import (
    CreatePromptTemplateRequest,
    PromptTemplate,
    UpdatePromptTemplateRequest,
)
from .repository import PromptTemplateRepository
from .engine import extract_variables_from_prompt, validate_prompt_template
from .exceptions import (
    InvalidTemplateError,
    SystemTemplateError,
    TemplateAccessDeniedError,
    TemplateNotFoundError,
)

logger = logging.getLogger(__name__)


class PromptTemplateService(IPromptTemplateService):
    """
    Prompt template service backed by Supabase.

    Keeps at most one default template: promoting a template clears the
    flag on every other one first.
    """

    def __init__(self, repository: PromptTemplateRepository):
        self._repo = repository

    async def list_templates(self) -> list[PromptTemplate]:
        return self._repo.list_all()

    async def get_template(self, template_id: str) -> PromptTemplate:
        template = self._repo.get_by_id(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    async def create_template(
        self,
        author_id: str,
        request: CreatePromptTemplateRequest,
    ) -> PromptTemplate:
        variables = extract_variables_from_prompt(request.prompt)
        validation = validate_prompt_template(request.name, request.prompt, variables)
        if not validation.valid:
            raise InvalidTemplateError(validation.errors)

        if request.is_default:
            self._repo.clear_default()

        template = self._repo.create({
            "name": request.name.strip(),
            "description": (request.description or "").strip() or None,
            "prompt": request.prompt.strip(),
            "variables": variables,
            "author_id": author_id,
            "is_default": request.is_default,
            "is_system": False,
        })
        logger.info(f"Prompt template {template.id} created by {author_id}")
        return template

    async def update_template(
        self,
        template_id: str,
        user_id: str,
        request: UpdatePromptTemplateRequest,
    ) -> PromptTemplate:
        existing = await self.get_template(template_id)

        # System templates are shared by all admins
        if not existing.is_system and existing.author_id != user_id:
            raise TemplateAccessDeniedError(template_id, user_id, action="edit")

        data: dict[str, Any] = {}

        if request.name is not None or request.prompt is not None:
            name = request.name if request.name is not None else existing.name
            prompt = request.prompt if request.prompt is not None else existing.prompt
            variables = extract_variables_from_prompt(prompt)

            validation = validate_prompt_template(name, prompt, variables)
            if not validation.valid:
                raise InvalidTemplateError(validation.errors)

            if request.name is not None:
                data["name"] = name.strip()
            if request.prompt is not None:
                data["prompt"] = prompt.strip()
                data["variables"] = variables

        if "description" in request.model_fields_set:
            data["description"] = (request.description or "").strip() or None

        if request.is_default is not None:
            if request.is_default:
                self._repo.clear_default(except_id=template_id)
            data["is_default"] = request.is_default

        if not data:
            return existing

        return self._repo.update(template_id, data)

    async def delete_template(self, template_id: str, user_id: str) -> None:
        existing = await self.get_template(template_id)

        if existing.is_system:
            raise SystemTemplateError(template_id)

        if existing.author_id != user_id:
            raise TemplateAccessDeniedError(template_id, user_id, action="delete")

        self._repo.delete(template_id)
        logger.info(f"Prompt template {template_id} deleted by {user_id}")
