"""Markdown rendering for poststore.

This module turns a post body into HTML. It implements the ContentRenderer
protocol on top of mistune, with Pygments highlighting for fenced code and
slug ids on headings for TOC generation.

Raw HTML in a post body is escaped and harmful link protocols are replaced,
so rendered output can be embedded into a page without injecting scripts.
A fresh mistune instance is built per call; output depends only on the input
text.

Key classes:
- MarkdownRenderer: Renders Markdown to HTML and collects headings.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

import mistune
from mistune.util import escape
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .content import Heading

logger = logging.getLogger(__name__)

DEFAULT_PLUGINS = ("strikethrough", "footnotes", "table", "url")

TAG_RE = re.compile(r"<[^>]+>")


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text, possibly containing inline HTML.

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = TAG_RE.sub("", text).lower().strip()
    slug = re.sub(r"&[a-z0-9#]+;", "", slug)
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


class _HighlightRenderer(mistune.HTMLRenderer):
    """Escaping HTML renderer with heading ids and syntax highlighting.

    Attributes:
        headings: List of Heading objects extracted during rendering.
    """

    def __init__(self):
        super().__init__(escape=True)
        self.headings: list[Heading] = []
        self._heading_id_counts: dict[str, int] = {}
        self._used_ids: set[str] = set()

    def heading(self, text: str, level: int, **attrs) -> str:
        """Render a heading with auto-generated ID and track for TOC.

        Args:
            text: Heading text content.
            level: Heading level (1-6).
            **attrs: Additional attributes.

        Returns:
            HTML heading tag with id attribute.
        """
        base_id = _generate_heading_id(text) or "section"

        heading_id = base_id
        count = self._heading_id_counts.get(base_id, 0)
        while heading_id in self._used_ids:
            count += 1
            heading_id = f"{base_id}-{count}"
        self._heading_id_counts[base_id] = count
        self._used_ids.add(heading_id)

        self.headings.append(
            Heading(id=heading_id, text=TAG_RE.sub("", text), level=level)
        )

        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'javascript').

        Returns:
            HTML string with highlighted code.
        """
        lang = info.strip().split(None, 1)[0] if info and info.strip() else ""
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                logger.debug("No Pygments lexer for %r, rendering plain", lang)
            else:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        lang_class = f' class="language-{escape(lang)}"' if lang else ""
        return f"<pre><code{lang_class}>{escape(code)}</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    Attributes:
        plugins: Names of the mistune plugins enabled for every render.
    """

    def __init__(self, plugins: Iterable[str] = DEFAULT_PLUGINS):
        self.plugins = tuple(plugins)

    def render(self, content: str) -> tuple[str, list[Heading]]:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source content.

        Returns:
            Tuple of (rendered HTML, list of Heading objects).
        """
        renderer = _HighlightRenderer()
        markdown = mistune.create_markdown(renderer=renderer, plugins=list(self.plugins))
        html = markdown(content)
        return html, renderer.headings
