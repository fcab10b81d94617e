"""
Prompt templates module.

Parameterized instructions for article generation and the engine that
fills them in.

Public API:
- IPromptTemplateService: Interface for template management
- PromptTemplate, SimpleVariable, DescribedVariable: Template models
- extract_variables_from_prompt, replace_template_variables,
  validate_template_variables, validate_prompt_template,
  create_variables_from_simple_mode, get_variable_value: Template engine
"""

from .interfaces import IPromptTemplateService
from .models import (
    PromptTemplate,
    SimpleVariable,
    DescribedVariable,
    TemplateVariable,
    VariableValidation,
    TemplateValidation,
    CreatePromptTemplateRequest,
    UpdatePromptTemplateRequest,
)
from .engine import (
    extract_variables_from_prompt,
    replace_template_variables,
    validate_template_variables,
    validate_prompt_template,
    create_variables_from_simple_mode,
    get_variable_value,
)
from .exceptions import (
    TemplateNotFoundError,
    TemplateAccessDeniedError,
    SystemTemplateError,
    InvalidTemplateError,
)

__all__ = [
    # Interface
    "IPromptTemplateService",
    # Models
    "PromptTemplate",
    "SimpleVariable",
    "DescribedVariable",
    "TemplateVariable",
    "VariableValidation",
    "TemplateValidation",
    "CreatePromptTemplateRequest",
    "UpdatePromptTemplateRequest",
    # Engine
    "extract_variables_from_prompt",
    "replace_template_variables",
    "validate_template_variables",
    "validate_prompt_template",
    "create_variables_from_simple_mode",
    "get_variable_value",
    # Exceptions
    "TemplateNotFoundError",
    "TemplateAccessDeniedError",
    "SystemTemplateError",
    "InvalidTemplateError",
]
