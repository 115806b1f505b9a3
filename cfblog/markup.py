"""Markdown to HTML conversion for post bodies and custom fields."""

import re

import markdown

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]

_HTML_TAG_RE = re.compile(r"<\w+[^>]*>")
_MARKDOWN_INDICATORS = [
    re.compile(r"(^|\n)#{1,6}\s+"),          # headings
    re.compile(r"(^|\n)(>|-|\*|\d+\.)\s+"),  # quotes and lists
    re.compile(r"\*\*[^*]+\*\*"),            # bold
    re.compile(r"`{1,3}[^`]*`{1,3}"),        # inline code
    re.compile(r"(^|\n)```"),                # fences
]


def is_probably_markdown(text: str) -> bool:
    """Guess whether text is Markdown rather than HTML."""
    if not text:
        return False
    looks_markdown = any(pattern.search(text) for pattern in _MARKDOWN_INDICATORS)
    return looks_markdown and not _HTML_TAG_RE.search(text)


def md_to_html(text: str) -> str:
    """Render Markdown to HTML.

    Input that already contains an HTML tag is returned unchanged. Raw HTML
    inside Markdown is passed through and single newlines do not become
    ``<br>``.
    """
    if not text:
        return ""
    if _HTML_TAG_RE.search(text):
        return text
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)
