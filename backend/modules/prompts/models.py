"""
Prompt templates data models.

A template's variable list mixes two shapes in storage: a bare string
(``"topic"``) and a descriptor object (``{"name": "tone", "label": ...}``).
Both are parsed into a tagged union so callers branch on the type instead
of inspecting raw JSON.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 100
MIN_PROMPT_LENGTH = 50


class SimpleVariable(BaseModel):
    """Variable declared by name only. Stored as a bare string."""

    kind: Literal["simple"] = "simple"
    name: str

    model_config = {"frozen": True}


class DescribedVariable(BaseModel):
    """Variable declared with a descriptor. Stored as a JSON object."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: Literal["described"] = "described"
    name: str
    label: str = ""
    description: Optional[str] = None
    required: Optional[bool] = None
    default_value: Optional[str] = Field(None, alias="defaultValue")
    type: Literal["text", "select", "textarea"] = "text"
    options: Optional[list[str]] = None


TemplateVariable = Annotated[
    Union[SimpleVariable, DescribedVariable],
    Field(discriminator="kind"),
]


def parse_variable(raw: Any) -> Any:
    """Tag a stored variable (string or object) with its union variant."""
    if isinstance(raw, str):
        return {"kind": "simple", "name": raw}
    if isinstance(raw, dict) and "kind" not in raw:
        return {"kind": "described", **raw}
    return raw


class PromptTemplate(BaseModel):
    """A reusable, parameterized instruction for article generation."""

    id: str = Field(..., description="Template ID (UUID)")
    name: str = Field(..., description="Template name")
    description: Optional[str] = None
    prompt: str = Field(..., description="Prompt text with {variable} markers")
    variables: list[TemplateVariable] = Field(default_factory=list)
    is_default: bool = False
    is_system: bool = False
    author_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("variables", mode="before")
    @classmethod
    def tag_variables(cls, value: Any) -> Any:
        if value is None:
            return []
        return [parse_variable(v) for v in value]


class VariableValidation(BaseModel):
    """Result of checking runtime values against a template."""

    valid: bool
    missing: list[str] = Field(default_factory=list)


class TemplateValidation(BaseModel):
    """Result of structural template validation."""

    valid: bool
    errors: list[str] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# API request / response models
# -----------------------------------------------------------------------------


class CreatePromptTemplateRequest(BaseModel):
    """Request to create a prompt template."""

    name: str
    description: Optional[str] = None
    prompt: str
    is_default: bool = False


class UpdatePromptTemplateRequest(BaseModel):
    """Partial update of a prompt template. Omitted fields stay unchanged."""

    name: Optional[str] = None
    description: Optional[str] = None
    prompt: Optional[str] = None
    is_default: Optional[bool] = None


class PromptTemplateListResponse(BaseModel):
    templates: list[PromptTemplate]
