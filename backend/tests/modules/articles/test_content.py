"""Tests for article content helpers."""

import pytest

from modules.articles.content import (
    BRAND,
    calculate_reading_time,
    create_article_prompt,
    extract_keywords,
    extract_title,
    generate_excerpt,
    generate_seo_metadata,
    generate_slug,
    strip_title,
    title_from_slug,
)


class TestGenerateSlug:
    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Light a Candle: 5 Ideas", "light-a-candle-5-ideas"),
            ("  many   spaces  ", "many-spaces"),
            ("dash -- run", "dash-run"),
            ("Свеча памяти", "svecha-pamyati"),
            ("Медитация при свечах", "meditatsiya-pri-svechakh"),
            ("Щедрый Ёжик", "shchedryy-ezhik"),
            ("Свеча memory ritual", "svecha-memory-ritual"),
            ("蝋燭", ""),
        ],
    )
    def test_slugs(self, title, expected):
        assert generate_slug(title) == expected


class TestReadingTime:
    def test_minimum_one_minute(self):
        assert calculate_reading_time("") == 1

    def test_rounds_up(self):
        assert calculate_reading_time("word " * 201) == 2


class TestExcerpt:
    def test_short_content_unchanged(self):
        assert generate_excerpt("## Hello\n\nworld") == "Hello world"

    def test_long_content_truncated(self):
        excerpt = generate_excerpt("x" * 300)
        assert excerpt == "x" * 150 + "..."


class TestTitle:
    def test_extract_title(self):
        assert extract_title("intro\n# Main Title \n## Sub") == "Main Title"

    def test_no_title(self):
        assert extract_title("## Only sub") == ""

    def test_strip_title(self):
        assert strip_title("# Title\n\nBody\n## Sub") == "Body\n## Sub"

    def test_title_from_slug(self):
        assert title_from_slug("quiet-evening-ritual") == "Quiet Evening Ritual"


class TestSeoMetadata:
    def test_short_title_gets_brand(self):
        seo = generate_seo_metadata("Evening ritual", "Some content")
        assert seo.seo_title == f"Evening ritual | {BRAND}"
        assert seo.seo_description == "Some content"

    def test_long_title_truncated(self):
        seo = generate_seo_metadata("t" * 60, "c")
        assert seo.seo_title == "t" * 50 + "..."

    def test_long_description_truncated(self):
        seo = generate_seo_metadata("Title", "d" * 500)
        assert len(seo.seo_description) == 160
        assert seo.seo_description.endswith("...")

    def test_keywords(self):
        keywords = extract_keywords("Как зажечь свечу памяти вечером дома")
        assert keywords[:3] == [BRAND, "символические свечи", "онлайн свечи"]
        assert keywords[3:] == ["зажечь", "свечу", "памяти"]


class TestArticlePrompt:
    def test_without_candle_type(self):
        prompt = create_article_prompt("Вечерний ритуал со свечой")

        assert 'Напиши SEO-статью на тему "Вечерний ритуал со свечой"' in prompt
        assert "Язык: Русский" in prompt
        assert "5. Заключение\n" in prompt
        assert "{" not in prompt

    def test_with_candle_type(self):
        prompt = create_article_prompt("Gratitude journaling", candle_type="gratitude", language="en")

        assert "Язык: English" in prompt
        assert "Gratitude - to express gratitude" in prompt
        assert "Заключение с призывом к действию" in prompt
