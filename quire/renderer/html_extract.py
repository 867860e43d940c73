"""Recover markdown from an edited preview HTML fragment.

The preview pane is editable; when the user leaves it, the edited HTML is
walked with BeautifulSoup and converted back into the small markdown subset
the renderer produces. Anything the mapping does not know (including
dictionary highlight spans) contributes only its text.
"""

from __future__ import annotations

import typing as typ

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

if typ.TYPE_CHECKING:
    from bs4.element import PageElement

BLOCK_TEMPLATES: dict[str, str] = {
    "h1": "# {}\n\n",
    "h2": "## {}\n\n",
    "h3": "### {}\n\n",
    "h4": "#### {}\n\n",
    "h5": "##### {}\n\n",
    "h6": "###### {}\n\n",
    "p": "{}\n\n",
    "li": "- {}\n",
    "blockquote": "> {}\n\n",
    "strong": "**{}**",
    "b": "**{}**",
    "em": "*{}*",
    "i": "*{}*",
    "code": "`{}`",
    "div": "{}\n",
}


def _extract(node: PageElement) -> str:
    """Return markdown for ``node`` and its descendants."""
    # Comments, doctypes, declarations and processing instructions.
    if isinstance(node, PreformattedString):
        return ""
    if isinstance(node, NavigableString):
        return str(node)
    if not isinstance(node, Tag):
        return ""
    if node.name == "br":
        return "\n"
    inner = "".join(_extract(child) for child in node.children)
    template = BLOCK_TEMPLATES.get(node.name)
    return template.format(inner) if template else inner


def html_to_markdown(html: str) -> str:
    """Convert a preview HTML fragment back into markdown.

    Parameters
    ----------
    html : str
        HTML produced by the renderer and possibly edited in place.

    Returns
    -------
    str
        Markdown text with surrounding whitespace stripped.

    Examples
    --------
    >>> html_to_markdown("<h2>Intro</h2><p>Some <strong>bold</strong> text</p>")
    '## Intro\\n\\nSome **bold** text'
    """
    soup = BeautifulSoup(html, "html.parser")
    return "".join(_extract(child) for child in soup.children).strip()


__all__ = ["html_to_markdown"]
