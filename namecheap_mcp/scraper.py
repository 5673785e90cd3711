"""
Response Scraper

Pattern-based field extraction from Namecheap XML replies.

This is a shallow text scraper, not an XML parser. It assumes the registrar's
replies are well formed and attribute-flat: CDATA sections, nested elements
with the same tag name and malformed documents are not handled and yield
empty or partial results rather than an error.
"""

from __future__ import annotations

import html
import re

from .models import RegistrarError

_COMMAND_RESPONSE = re.compile(
    r"<CommandResponse(?=[\s/>])[^>]*>(.*?)</CommandResponse>", re.DOTALL
)
_ERROR = re.compile(r"<Error(?=[\s>])([^>]*)>(.*?)</Error>", re.DOTALL)


def command_response_body(xml: str) -> str:
    """Return the text inside the first <CommandResponse> element, or ''."""
    match = _COMMAND_RESPONSE.search(xml)
    return match.group(1) if match else ""


def attribute(element: str, name: str) -> str | None:
    """
    Return the value of attribute ``name`` in an element's opening tag.

    The attribute name is matched case-insensitively and as a whole name,
    so ``Name`` never matches inside ``DomainName``.
    """
    pattern = rf'(?<![\w:.-]){re.escape(name)}\s*=\s*"([^"]*)"'
    match = re.search(pattern, element, re.IGNORECASE)
    return html.unescape(match.group(1)) if match else None


def elements(xml: str, tag: str) -> list[str]:
    """Return every opening tag ``<tag ...>`` in document order."""
    pattern = rf"<{re.escape(tag)}(?=[\s/>])[^>]*>"
    return re.findall(pattern, xml)


def element_texts(xml: str, tag: str) -> list[str]:
    """Return the stripped text content of every ``<tag>text</tag>``."""
    pattern = rf"<{re.escape(tag)}(?=[\s>])[^>]*>(.*?)</{re.escape(tag)}>"
    return [html.unescape(text.strip()) for text in re.findall(pattern, xml, re.DOTALL)]


def element_text(xml: str, tag: str) -> str | None:
    """Return the text content of the first ``<tag>text</tag>``, if any."""
    texts = element_texts(xml, tag)
    return texts[0] if texts else None


def error_info(xml: str) -> RegistrarError | None:
    """Return the first ``<Error Number="N">message</Error>`` block, if any."""
    match = _ERROR.search(xml)
    if match is None:
        return None
    return RegistrarError(
        number=attribute(match.group(1), "Number"),
        message=html.unescape(match.group(2).strip()),
    )
