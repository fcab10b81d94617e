"""Tests for prompt template models."""

import pytest
from pydantic import ValidationError

from modules.prompts.models import (
    DescribedVariable,
    PromptTemplate,
    SimpleVariable,
)


class TestVariableUnion:
    def test_mixed_storage_shapes(self):
        template = PromptTemplate(
            id="tpl-1",
            name="Article",
            prompt="...",
            variables=[
                "topic",
                {"name": "tone", "label": "Tone", "type": "select", "options": ["warm", "calm"]},
            ],
        )

        simple, described = template.variables
        assert isinstance(simple, SimpleVariable)
        assert simple.name == "topic"
        assert isinstance(described, DescribedVariable)
        assert described.type == "select"
        assert described.required is None

    def test_null_variables(self):
        template = PromptTemplate(id="tpl-1", name="Article", prompt="...", variables=None)
        assert template.variables == []

    def test_default_value_alias(self):
        variable = DescribedVariable(**{"name": "tone", "defaultValue": "warm"})
        assert variable.default_value == "warm"

    def test_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            DescribedVariable(name="tone", type="checkbox")

