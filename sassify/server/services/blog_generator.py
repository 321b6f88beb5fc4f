"""
AI blog article generator.

Asks the chat-completion API for a complete article in restricted HTML,
validates the answer, makes its slug unique and stores it as a published
``Blog``.
"""

from __future__ import annotations

import random
import re
from typing import Any, Callable, Dict, List, Optional, Sequence

from sassify.core.database.base import utc_now
from sassify.core.database.entities.blogs import Blog
from sassify.core.database.repositories.blogs import BlogRepository
from sassify.core.logging_config import get_logger
from sassify.server.core.config import settings

from .errors import BlogGenerationError
from .openai_service import OpenAIService

logger = get_logger(__name__)

DEFAULT_TOPICS: List[str] = [
    "Why accurate estimation matters in web projects in 2025",
    "Web development trends to watch this year",
    "How to optimise the development costs of an application",
    "Common mistakes in web project management",
    "A complete guide to choosing the right web technologies",
    "The impact of AI on modern web development",
    "Strategies to improve the UX/UI of your application",
    "Web security best practices in 2025",
]

REQUIRED_FIELDS = ("title", "slug", "content", "author")
MIN_CONTENT_LENGTH = 500

_FORBIDDEN_TAG_RE = re.compile(r"<(div|span)[^>]*>", re.IGNORECASE)
_SLUG_RE = re.compile(r"^[a-z0-9-]+$")

GENERATION_OPTIONS: Dict[str, Any] = {
    "model": "gpt-4o-mini",
    "temperature": 0.3,
    "max_tokens": 3000,
    "response_format": {"type": "json_object"},
    "purpose": "blog",
}


def build_article_prompt(topic: str, language: str = "French") -> str:
    return (
        "STRICTLY FORBIDDEN: <div>, <span> or any tag other than <h2>, <p>, <ul>, <ol>. "
        "If you use another tag, the answer will be rejected.\n\n"
        "USE ONLY THESE HTML TAGS:\n"
        "- <h2>Main heading</h2> (5-6 sections in the article)\n"
        "- <p>Paragraph of text with <strong>keywords</strong></p>\n"
        "- <ul><li>List item</li></ul>\n"
        "- <ol><li>Numbered step</li></ol>\n\n"
        "FORBIDDEN: <div>, <span>, or any other tag\n"
        "MANDATORY: <h2>, <p>, <ul>, <ol> only\n\n"
        "EXACT EXAMPLE TO REPRODUCE:\n"
        "<h2>Section heading</h2>\n"
        "<p>Introduction paragraph with <strong>keywords</strong>.</p>\n"
        "<ul><li>Important point</li><li>Another point</li></ul>\n"
        "<p>Transition paragraph.</p>\n\n"
        "---\n\n"
        f'You are an expert web writer specialised in tech projects. Write an article about: "{topic}".\n\n'
        "AUDIENCE: Tech companies, CTOs, web agencies, freelance developers\n"
        "CONTEXT: Sassify is a SaaS incubator that helps freelance developers, agencies and companies "
        "estimate and launch their web projects.\n\n"
        "STRUCTURE: 5-6 sections with <h2>\n"
        "STYLE: Professional, concrete examples, practical advice. Add a few emojis to make the article "
        "more engaging. Sometimes invent before/after examples (with figures, company names, etc.) that "
        "illustrate the key points.\n\n"
        "ABSOLUTE RULE: Use ONLY <h2>, <p>, <ul>, <ol>. NEVER <div> or <span>.\n\n"
        "Write an article of 800-1400 words with 5-6 <h2> sections. Naturally include the keywords: "
        "project estimation, web development, development cost, project management, ROI, tech budget, "
        "agile, web agency, freelance.\n"
        "At the end add a call to action encouraging readers to use Sassify, or an actionable tip to "
        "improve their web projects.\n\n"
        f"Write the title, content and meta description in {language}.\n\n"
        "EXACT JSON ANSWER:\n"
        "{\n"
        '    "title": "SEO-optimised title (50-60 characters)",\n'
        '    "slug": "automatic-seo-slug",\n'
        '    "content": "Complete HTML with the structure preserved",\n'
        '    "author": "Sassify",\n'
        '    "meta_description": "SEO description of 150-160 characters",\n'
        '    "keywords": ["project-estimation", "web-development", "project-management"]\n'
        "}\n\n"
        "IMPERATIVE: The article must speak directly to the concerns of the tech audience (costs, "
        "deadlines, quality, ROI) with examples from the industry. Preserve the generated HTML formatting exactly."
    )


def contains_forbidden_tags(content: str) -> bool:
    return bool(_FORBIDDEN_TAG_RE.search(content or ""))


def validate_article(result: Dict[str, Any]) -> None:
    """Raise ``ValueError`` describing the first problem with a generated article."""
    for field in REQUIRED_FIELDS:
        value = result.get(field)
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Missing or empty field: {field}")
    if not _SLUG_RE.match(result["slug"]):
        raise ValueError("Invalid slug format")
    if len(result["content"]) < MIN_CONTENT_LENGTH:
        raise ValueError("Content too short")
    if contains_forbidden_tags(result["content"]):
        raise ValueError("Generated content contains <div> or <span> tags")


class BlogGeneratorService:
    """Generates and stores published blog articles."""

    def __init__(
        self,
        openai_service: OpenAIService,
        blogs: BlogRepository,
        *,
        topics: Sequence[str] = DEFAULT_TOPICS,
        choose: Callable[[Sequence[str]], str] = random.choice,
        language: Optional[str] = None,
    ) -> None:
        self.openai_service = openai_service
        self.blogs = blogs
        self.topics = topics
        self._choose = choose
        self.language = language or settings.blog_language

    async def generate_blog_article(self, topic: Optional[str] = None) -> Blog:
        """Generate, validate and persist one article.

        Args:
            topic: Subject of the article; a default topic is picked when empty.

        Raises:
            BlogGenerationError: if the API call fails or the answer is rejected.
        """
        selected_topic = topic or self._choose(self.topics)
        prompt = build_article_prompt(selected_topic, self.language)

        try:
            result = await self.openai_service.call_openai(prompt, GENERATION_OPTIONS)

            if isinstance(result.get("content"), str) and contains_forbidden_tags(result["content"]):
                raise ValueError("The generated answer contains <div> or <span> tags")
            validate_article(result)

            article = Blog(
                title=result["title"],
                slug=await self.ensure_unique_slug(result["slug"]),
                content=result["content"],
                author=result["author"],
                meta_description=_optional_text(result.get("meta_description"), 255),
                keywords=_keywords(result.get("keywords")),
                published=True,
                created_at=utc_now(),
                updated_at=None,
            )
            article = await self.blogs.create(article)
        except Exception as e:
            logger.error("Error while generating an article (topic=%r): %s", selected_topic, e)
            raise BlogGenerationError(f"Unable to generate the article: {e}") from e

        logger.info("Blog article generated: title=%r slug=%s", article.title, article.slug)
        return article

    async def ensure_unique_slug(self, base_slug: str) -> str:
        slug = base_slug
        counter = 1
        while await self.blogs.slug_exists(slug):
            slug = f"{base_slug}-{counter}"
            counter += 1
        return slug


def _optional_text(value: Any, max_length: int) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()[:max_length]


def _keywords(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if str(v).strip()]
