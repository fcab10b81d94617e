"""
Prompt template engine.

Pure functions for working with ``{variable}`` markers in prompt
templates: extraction, substitution, runtime-value validation and
structural template validation. Validation failures are returned as data.
"""

import logging
import re
from typing import Any, Mapping, Optional, Sequence, Union

from .models import (
    MAX_NAME_LENGTH,
    MIN_NAME_LENGTH,
    MIN_PROMPT_LENGTH,
    DescribedVariable,
    PromptTemplate,
    SimpleVariable,
    TemplateValidation,
    VariableValidation,
)

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "ru"

# A bare-named variable is optional unless it is this one.
REQUIRED_SIMPLE_VARIABLE = "topic"

_MARKER_RE = re.compile(r"\{([^}]+)\}")

_CANDLE_TYPE_DESCRIPTIONS: dict[str, dict[str, str]] = {
    "calm": {
        "ru": "Спокойствие - для умиротворения и гармонии",
        "en": "Calm - for peace and harmony",
    },
    "support": {
        "ru": "Поддержка - чтобы поддержать кого-то",
        "en": "Support - to support someone",
    },
    "memory": {
        "ru": "Память - в память о ком-то или о чем-то",
        "en": "Memory - in memory of someone or something",
    },
    "gratitude": {
        "ru": "Благодарность - чтобы выразить благодарность",
        "en": "Gratitude - to express gratitude",
    },
    "focus": {
        "ru": "Фокус - для концентрации и намерений",
        "en": "Focus - for concentration and intentions",
    },
}

_CANDLE_TYPE_LABELS: dict[str, dict[str, str]] = {
    "calm": {"ru": "спокойствия", "en": "calm"},
    "support": {"ru": "поддержки", "en": "support"},
    "memory": {"ru": "памяти", "en": "memory"},
    "gratitude": {"ru": "благодарности", "en": "gratitude"},
    "focus": {"ru": "фокуса", "en": "focus"},
}

# Appended to the conclusion line of the article prompt
CTA_MARKER = " с призывом к действию"


def extract_variables_from_prompt(prompt: Optional[str]) -> list[str]:
    """
    Find all ``{name}`` markers in a prompt.

    Names are trimmed, empty names are skipped, and each name is returned
    once in order of first appearance.

    Example:
        >>> extract_variables_from_prompt("Write about {topic} for {language}")
        ['topic', 'language']
    """
    if not prompt:
        return []

    names: list[str] = []
    for match in _MARKER_RE.finditer(prompt):
        name = match.group(1).strip()
        if name and name not in names:
            names.append(name)
    return names


def replace_template_variables(template: str, values: Mapping[str, Any]) -> str:
    """
    Substitute ``{key}`` markers with values.

    Every occurrence of each key in ``values`` is replaced; ``None`` becomes
    an empty string. Markers whose key is not in ``values`` are left as-is.
    """
    result = template
    for key, value in values.items():
        replacement = "" if value is None else str(value)
        pattern = re.compile(r"\{" + re.escape(key) + r"\}")
        result = pattern.sub(lambda _: replacement, result)
    return result


def is_required(variable: Union[SimpleVariable, DescribedVariable]) -> bool:
    """Whether a declared variable must have a non-blank value."""
    if isinstance(variable, SimpleVariable):
        return variable.name == REQUIRED_SIMPLE_VARIABLE
    return variable.required is not False


def validate_template_variables(
    template: PromptTemplate,
    provided: Mapping[str, Any],
) -> VariableValidation:
    """
    Check that every required variable of a template has a value.

    A value counts as missing when it is absent, ``None`` or blank after
    stripping whitespace. Missing names keep declaration order.
    """
    missing = []
    for variable in template.variables:
        if not is_required(variable):
            continue
        value = provided.get(variable.name)
        if value is None or not str(value).strip():
            missing.append(variable.name)

    return VariableValidation(valid=not missing, missing=missing)


def validate_prompt_template(
    name: Optional[str],
    prompt: Optional[str],
    variables: Optional[Sequence[str]] = None,
) -> TemplateValidation:
    """
    Validate the structure of a template before it is stored.

    All violated rules are reported together. Placeholders that are used
    but not declared are only logged.

    Args:
        name: Template name (3-100 characters)
        prompt: Prompt text (at least 50 characters after trimming)
        variables: Declared variable names

    Returns:
        TemplateValidation with every error found
    """
    errors = []

    if not name or len(name.strip()) < MIN_NAME_LENGTH:
        errors.append(f"Template name must be at least {MIN_NAME_LENGTH} characters long")

    if name and len(name) > MAX_NAME_LENGTH:
        errors.append(f"Template name must not exceed {MAX_NAME_LENGTH} characters")

    if not prompt or len(prompt.strip()) < MIN_PROMPT_LENGTH:
        errors.append(f"Prompt must be at least {MIN_PROMPT_LENGTH} characters long")

    declared = set(variables or [])
    undeclared = [v for v in extract_variables_from_prompt(prompt) if v not in declared]
    if undeclared:
        logger.warning(f"Undeclared variables in prompt: {', '.join(undeclared)}")

    return TemplateValidation(valid=not errors, errors=errors)


def build_cta_section(candle_type: str, language: str = DEFAULT_LANGUAGE) -> str:
    """
    Call-to-action instruction for an article about a candle type.

    Unknown types are mentioned by their raw id.
    """
    description = _CANDLE_TYPE_DESCRIPTIONS.get(candle_type, {}).get(language) or candle_type
    label = _CANDLE_TYPE_LABELS.get(candle_type, {}).get(language) or candle_type

    if language == "ru":
        return (
            "\n\nВ конце статьи добавь мягкий призыв к действию с упоминанием "
            f'символической свечи типа "{description}". Например: "Готовы начать? '
            f'Зажгите свою первую свечу {label} прямо сейчас."'
        )
    return (
        "\n\nAt the end of the article, add a soft call to action mentioning "
        f'a symbolic candle of type "{description}".'
    )


def create_variables_from_simple_mode(
    topic: str,
    candle_type: Optional[str] = None,
    language: Optional[str] = None,
    category_name: Optional[str] = None,
) -> dict[str, str]:
    """
    Build template values for simple-mode article generation.

    ``topic`` and ``language`` are always set. ``ctaSection`` and
    ``candleTypeCTA`` are always present and empty unless a candle type is
    given, in which case they carry a call to action for that type.
    """
    lang = language or DEFAULT_LANGUAGE
    values = {
        "topic": topic,
        "language": lang,
    }

    if candle_type:
        values["candleType"] = candle_type
        values["ctaSection"] = build_cta_section(candle_type, lang)
        values["candleTypeCTA"] = CTA_MARKER
    else:
        values["ctaSection"] = ""
        values["candleTypeCTA"] = ""

    if category_name:
        values["categoryName"] = category_name

    return values


def get_variable_value(values: Mapping[str, Any], name: str) -> str:
    """Read a value, returning an empty string when it is absent or None."""
    value = values.get(name)
    return "" if value is None else str(value)
