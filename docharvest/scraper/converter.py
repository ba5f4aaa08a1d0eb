"""HTML → Markdown conversion.

A thin, deterministic wrapper around ``markdownify`` with a fixed
configuration: ATX headings, ``-`` bullets, fenced code blocks carrying a
language hint, and GitHub-flavoured tables and strikethrough.
"""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup
from markdownify import ATX, MarkdownConverter

_DROP_TAGS = ["script", "style", "noscript"]

_LANG_CLASS = re.compile(r"^(?:language|lang)-([\w+#.-]+)$")
_BLANK_RUNS = re.compile(r"\n{3,}")


def _language_from_classes(classes: Optional[list[str]]) -> Optional[str]:
    for cls in classes or []:
        match = _LANG_CLASS.match(cls)
        if match:
            return match.group(1)
    return None


def code_language(pre) -> str:
    """Derive a fence language from ``language-xxx`` / ``lang-xxx`` classes.

    The ``<pre>`` element is checked first, then its ``<code>`` child.
    Returns an empty string when no hint is present.
    """
    lang = _language_from_classes(pre.get("class"))
    if lang is None:
        code = pre.find("code")
        if code is not None:
            lang = _language_from_classes(code.get("class"))
    return lang or ""


class DocsMarkdownConverter(MarkdownConverter):
    """``MarkdownConverter`` preconfigured for documentation pages."""

    def __init__(self, **options) -> None:
        options.setdefault("heading_style", ATX)
        options.setdefault("bullets", "-")
        options.setdefault("code_language_callback", code_language)
        super().__init__(**options)


def html_to_markdown(html: str) -> str:
    """Convert an HTML fragment to Markdown.

    Pure and deterministic: identical input yields byte-identical output.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(_DROP_TAGS):
        tag.decompose()

    markdown = DocsMarkdownConverter().convert_soup(soup)
    markdown = _BLANK_RUNS.sub("\n\n", markdown)
    return markdown.strip()
