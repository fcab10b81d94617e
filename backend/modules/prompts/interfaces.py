"""
Prompt templates module interface.
"""

from typing import Protocol, runtime_checkable

from .models import (
    CreatePromptTemplateRequest,
    PromptTemplate,
    UpdatePromptTemplateRequest,
)


@runtime_checkable
class IPromptTemplateService(Protocol):
    """
    Interface for prompt template management.

    Callers are expected to be admins already; the service only enforces
    per-template ownership rules.
    """

    async def list_templates(self) -> list[PromptTemplate]:
        """All templates, the default one first."""
        ...

    async def get_template(self, template_id: str) -> PromptTemplate:
        """
        Get a template by ID.

        Raises:
            TemplateNotFoundError: If the template does not exist
        """
        ...

    async def create_template(
        self,
        author_id: str,
        request: CreatePromptTemplateRequest,
    ) -> PromptTemplate:
        """
        Create a user template.

        Raises:
            InvalidTemplateError: If the name or prompt is invalid
        """
        ...

    async def update_template(
        self,
        template_id: str,
        user_id: str,
        request: UpdatePromptTemplateRequest,
    ) -> PromptTemplate:
        """
        Update a template.

        Raises:
            TemplateNotFoundError: If the template does not exist
            TemplateAccessDeniedError: If a user template is not the caller's
            InvalidTemplateError: If the new name or prompt is invalid
        """
        ...

    async def delete_template(self, template_id: str, user_id: str) -> None:
        """
        Delete a user template.

        Raises:
            TemplateNotFoundError: If the template does not exist
            SystemTemplateError: If the template is a system template
            TemplateAccessDeniedError: If the template is not the caller's
        """
        ...
