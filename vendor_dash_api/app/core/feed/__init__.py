"""
Feed generation core module.
"""

from .models import FeedItem, FeedConfig
from .fetcher import fetch_feed_items, strip_html, is_in_stock
from .xml_writer import write_feed_xml, escape_xml
from .service import generate_feed

__all__ = [
    'FeedItem',
    'FeedConfig',
    'fetch_feed_items',
    'strip_html',
    'is_in_stock',
    'write_feed_xml',
    'escape_xml',
    'generate_feed'
]
