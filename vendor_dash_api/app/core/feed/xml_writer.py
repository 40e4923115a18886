"""
XML writer for the RSS 2.0 catalog feed (Google Shopping 'g:' namespace).
"""

import re
from typing import List, Iterable, Tuple

from .models import FeedItem, FeedConfig


# Google Shopping namespace
G_NS = 'http://base.google.com/ns/1.0'

# Ampersand must come first so entities added later are not escaped twice
_XML_ESCAPES = (
    ('&', '&amp;'),
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
    ("'", '&apos;'),
)

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS_RE = re.compile(
    '[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]'
)


def escape_xml(text: str) -> str:
    """Replace the five reserved XML characters with their entities."""
    if not text:
        return ''
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    return text


def _clean_text(value: str) -> str:
    return escape_xml(_INVALID_XML_CHARS_RE.sub('', value or ''))


def _render_elements(elements: Iterable[Tuple[str, str]], indent: str) -> List[str]:
    """Every element body goes through the same escaping path."""
    return [f"{indent}<{tag}>{_clean_text(text)}</{tag}>" for tag, text in elements]


def render_item(item: FeedItem, indent: str = '    ') -> str:
    """Serialize one FeedItem as an <item> fragment."""
    lines = [f"{indent}<item>"]
    lines.extend(_render_elements(item.elements(), indent + '  '))
    lines.append(f"{indent}</item>")
    return '\n'.join(lines)


def write_feed_xml(items: List[FeedItem], config: FeedConfig) -> str:
    """
    Generate the full feed document.

    Args:
        items: List of FeedItem objects (may be empty)
        config: FeedConfig with channel metadata

    Returns:
        XML string with a UTF-8 declaration
    """
    header = [
        ('title', config.channel_title),
        ('link', config.channel_link),
        ('description', config.channel_description),
        ('total_items', str(len(items))),
    ]

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<rss version="2.0" xmlns:g="{G_NS}">',
        '  <channel>',
    ]
    lines.extend(_render_elements(header, '    '))
    lines.extend(render_item(item) for item in items)
    lines.append('  </channel>')
    lines.append('</rss>')
    return '\n'.join(lines) + '\n'
