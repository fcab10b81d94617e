"""
Article content helpers.

Slugs, excerpts, reading time and SEO metadata derived from Markdown,
plus the built-in generation prompt used when no template is chosen.
"""

import math
import re
from typing import Optional

from modules.prompts.engine import (
    DEFAULT_LANGUAGE,
    create_variables_from_simple_mode,
    replace_template_variables,
)
from .models import SEOMetadata


BRAND = "CandleTime"
WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 150
SEO_TITLE_LIMIT = 50
SEO_DESCRIPTION_LIMIT = 160
MAX_KEYWORDS = 10

BASE_KEYWORDS = [BRAND, "символические свечи", "онлайн свечи"]

STOP_WORDS = frozenset({
    "как", "что", "для", "это", "или", "и", "в", "на", "с", "по", "от", "до",
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
})

_MARKDOWN_CHARS_RE = re.compile(r"[#*\[\]()]")
_NEWLINES_RE = re.compile(r"\n+")

_LANGUAGE_NAMES = {"ru": "Русский", "en": "English"}

_CYRILLIC_TO_LATIN = str.maketrans({
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "e",
    "ж": "zh", "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "kh", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "shch",
    "ъ": "", "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
})

ARTICLE_PROMPT = """Ты - эксперт по написанию SEO-оптимизированных статей для сайта CandleTime.

CandleTime - это тихое место для зажигания символических свечей онлайн. Без ленты и лайков, только спокойный жест внимания.

Задача: Напиши SEO-статью на тему "{topic}".

Требования:
- Длина: 1200-1800 слов
- Формат: Markdown (используй H1 для главного заголовка, H2 для разделов, H3 для подразделов, списки, параграфы)
- Тон: спокойный, теплый, без пафоса
- Стиль: простой, человеческий, без инфобизнеса
- Язык: {languageName}
{ctaSection}

Структура статьи:
1. H1 заголовок (главный заголовок статьи - должен быть на первой строке, начинаться с "# ")
2. Введение (2-3 параграфа, объясняющие тему)
3. Основной контент (несколько разделов с H2, каждый раздел может содержать подразделы H3)
4. Практические советы или примеры (если применимо)
5. Заключение{candleTypeCTA}

Важно:
- Используй реальные примеры и практические советы
- Пиши естественно, как будто разговариваешь с читателем
- Избегай клише и общих фраз
- Структурируй информацию логично
- Используй списки и подзаголовки для лучшей читаемости

Верни только Markdown контент статьи, без дополнительных комментариев или объяснений."""


def generate_slug(title: str) -> str:
    """
    URL slug from a title.

    Russian letters are transliterated, then only ASCII letters, digits and
    hyphens survive; runs of whitespace become a single hyphen. The result
    may be empty for titles in other scripts.

    Example:
        >>> generate_slug("Light a Candle: 5 Ideas")
        'light-a-candle-5-ideas'
        >>> generate_slug("Свеча памяти")
        'svecha-pamyati'
    """
    slug = title.lower().translate(_CYRILLIC_TO_LATIN)
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug.strip())
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def calculate_reading_time(content: str) -> int:
    """Minutes to read at 200 words per minute, at least 1."""
    words = len(content.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def to_plain_text(content: str) -> str:
    """Strip Markdown punctuation and fold newlines into spaces."""
    text = _MARKDOWN_CHARS_RE.sub("", content)
    return _NEWLINES_RE.sub(" ", text).strip()


def generate_excerpt(content: str, length: int = EXCERPT_LENGTH) -> str:
    """First ``length`` characters of plain text, with ``...`` if cut."""
    plain = to_plain_text(content)
    excerpt = plain[:length].strip()
    return excerpt + "..." if len(excerpt) < len(plain) else excerpt


def extract_title(content: str) -> str:
    """Text of the first ``# `` heading, or an empty string."""
    for line in content.split("\n"):
        if line.startswith("# "):
            return line[2:].strip()
    return ""


def strip_title(content: str) -> str:
    """Drop H1 lines from Markdown content."""
    return "\n".join(line for line in content.split("\n") if not line.startswith("# ")).strip()


def extract_keywords(title: str) -> list[str]:
    """Base keywords plus up to three meaningful words from the title."""
    title_words = [
        word for word in title.lower().split()
        if len(word) > 3 and word not in STOP_WORDS
    ][:3]
    return (BASE_KEYWORDS + title_words)[:MAX_KEYWORDS]


def generate_seo_metadata(title: str, content: str) -> SEOMetadata:
    """
    SEO title, description and keywords for an article.

    Short titles get the brand suffix; long ones are truncated instead.
    The description is the plain-text start of the content, at most 160
    characters.
    """
    if len(title) > SEO_TITLE_LIMIT:
        seo_title = title[:SEO_TITLE_LIMIT].strip() + "..."
    else:
        seo_title = f"{title} | {BRAND}"

    plain = to_plain_text(content)
    if len(plain) > SEO_DESCRIPTION_LIMIT:
        seo_description = plain[:SEO_DESCRIPTION_LIMIT - 3].strip() + "..."
    else:
        seo_description = plain

    return SEOMetadata(
        seo_title=seo_title,
        seo_description=seo_description,
        seo_keywords=extract_keywords(title),
    )


def create_article_prompt(
    topic: str,
    candle_type: Optional[str] = None,
    language: str = DEFAULT_LANGUAGE,
) -> str:
    """Built-in generation prompt for a topic, with an optional candle CTA."""
    values = create_variables_from_simple_mode(topic, candle_type, language)
    values["languageName"] = _LANGUAGE_NAMES.get(language, _LANGUAGE_NAMES[DEFAULT_LANGUAGE])
    return replace_template_variables(ARTICLE_PROMPT, values)


def title_from_slug(slug: str) -> str:
    """``"quiet-evening"`` -> ``"Quiet Evening"``."""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))
