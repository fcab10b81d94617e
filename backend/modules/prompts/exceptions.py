"""
Prompt templates module exceptions.
"""

from shared.exceptions import (
    NotFoundError,
    ValidationError,
    AuthorizationError,
)


class TemplateNotFoundError(NotFoundError):
    """Raised when a prompt template is not found."""

    def __init__(self, template_id: str):
        super().__init__(
            "Template not found",
            code="TEMPLATE_NOT_FOUND",
            details={"template_id": template_id},
        )


class TemplateAccessDeniedError(AuthorizationError):
    """Raised when an admin edits or deletes another admin's template."""

    def __init__(self, template_id: str, user_id: str, action: str = "edit"):
        super().__init__(
            f"Forbidden: You can only {action} your own templates",
            code="TEMPLATE_ACCESS_DENIED",
            details={"template_id": template_id, "user_id": user_id},
        )


class SystemTemplateError(AuthorizationError):
    """Raised when deleting a system template."""

    def __init__(self, template_id: str):
        super().__init__(
            "Cannot delete system template",
            code="SYSTEM_TEMPLATE",
            details={"template_id": template_id},
        )


class InvalidTemplateError(ValidationError):
    """Raised when a template fails structural validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            "; ".join(errors),
            code="INVALID_TEMPLATE",
            details={"errors": errors},
        )
