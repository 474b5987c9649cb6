"""HTML to Markdown — Best-effort textual rewrite of simple HTML markup.

Not a parser. The transform is an ordered list of regex substitutions applied
to the whole text, each one operating on the output of the previous step.
Nested or malformed markup is not guaranteed to survive; the output is meant
to be a readable approximation for headings, paragraphs, links, emphasis,
lists and line breaks.
"""

from __future__ import annotations

import html
import re

_HEADING = re.compile(r"<h([1-6])[^>]*>(.*?)</h\1>", re.IGNORECASE)
_PARAGRAPH = re.compile(r"<p(?:\s[^>]*)?>(.*?)</p>", re.IGNORECASE)
_ANCHOR = re.compile(r"""<a\s[^>]*href=["']([^"']*)["'][^>]*>(.*?)</a>""", re.IGNORECASE)
_BOLD = re.compile(r"<(strong|b)(?:\s[^>]*)?>(.*?)</\1>", re.IGNORECASE)
_ITALIC = re.compile(r"<(em|i)(?:\s[^>]*)?>(.*?)</\1>", re.IGNORECASE)
_UNORDERED_LIST = re.compile(r"<ul(?:\s[^>]*)?>(.*?)</ul>", re.IGNORECASE | re.DOTALL)
_ORDERED_LIST = re.compile(r"<ol(?:\s[^>]*)?>(.*?)</ol>", re.IGNORECASE | re.DOTALL)
_LIST_ITEM = re.compile(r"<li(?:\s[^>]*)?>(.*?)</li>", re.IGNORECASE)
_LINE_BREAK = re.compile(r"<br(?:\s[^>]*)?/?>", re.IGNORECASE)
_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_SCRIPT_STYLE = re.compile(r"<(script|style)(?:\s[^>]*)?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_ANY_TAG = re.compile(r"<[^>]*>")
_EXTRA_NEWLINES = re.compile(r"\n\s*\n\s*\n")


def _heading(match: re.Match[str]) -> str:
    return "#" * int(match.group(1)) + " " + match.group(2) + "\n\n"


def _unordered_list(match: re.Match[str]) -> str:
    items = _LIST_ITEM.sub(lambda item: f"- {item.group(1)}\n", match.group(1))
    return f"{items}\n"


def _ordered_list(match: re.Match[str]) -> str:
    counter = 0

    def _item(item: re.Match[str]) -> str:
        nonlocal counter
        counter += 1
        return f"{counter}. {item.group(1)}\n"

    items = _LIST_ITEM.sub(_item, match.group(1))
    return f"{items}\n"


def html_to_markdown(text: str) -> str:
    """Rewrite simple HTML into Markdown.

    Args:
        text: HTML (or plain text, which passes through mostly unchanged).

    Returns:
        The Markdown approximation, stripped of leading/trailing whitespace.

    Example:
        >>> html_to_markdown("<h1>Title</h1><p>Hello <b>world</b></p>")
        '# Title\\n\\nHello **world**'
    """
    if not text:
        return ""

    markdown = _HEADING.sub(_heading, text)
    markdown = _PARAGRAPH.sub(r"\1\n\n", markdown)
    markdown = _ANCHOR.sub(r"[\2](\1)", markdown)
    markdown = _BOLD.sub(r"**\2**", markdown)
    markdown = _ITALIC.sub(r"*\2*", markdown)
    markdown = _UNORDERED_LIST.sub(_unordered_list, markdown)
    markdown = _ORDERED_LIST.sub(_ordered_list, markdown)
    markdown = _LINE_BREAK.sub("\n", markdown)
    markdown = _COMMENT.sub("", markdown)
    markdown = _SCRIPT_STYLE.sub("", markdown)
    markdown = _ANY_TAG.sub("", markdown)
    markdown = html.unescape(markdown)
    markdown = _EXTRA_NEWLINES.sub("\n\n", markdown)
    return markdown.strip()
