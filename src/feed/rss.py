"""RSS 2.0 serialization for a LanguageFeed."""

import re
import xml.etree.ElementTree as ET
from email.utils import format_datetime

from src.feed.models import LanguageFeed

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# characters XML 1.0 does not allow anywhere in a document
INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def xml_text(value: str) -> str:
    """Replace characters XML 1.0 forbids with U+FFFD."""
    return INVALID_XML_CHARS.sub("\ufffd", value)


def render_rss(feed: LanguageFeed) -> str:
    """
    Build the RSS document for one feed.

    Descriptions are HTML; ElementTree escapes them, which is what RSS
    readers expect inside <description>. ElementTree does not drop
    control characters (ANSI escapes show up in release notes), so all
    text goes through xml_text first.
    """
    rss = ET.Element("rss", version="2.0")
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = xml_text(feed.title)
    ET.SubElement(channel, "link").text = xml_text(feed.link_url)
    ET.SubElement(channel, "description").text = xml_text(feed.title)
    if feed.last_updated_at is not None:
        ET.SubElement(channel, "lastBuildDate").text = format_datetime(feed.last_updated_at)

    for entry in feed.entries:
        item = ET.SubElement(channel, "item")
        ET.SubElement(item, "title").text = xml_text(entry.title)
        ET.SubElement(item, "link").text = xml_text(entry.link_url)
        ET.SubElement(item, "description").text = xml_text(entry.description)
        if entry.author_name:
            ET.SubElement(item, "author").text = xml_text(entry.author_name)
        ET.SubElement(item, "guid", isPermaLink="true").text = xml_text(entry.id)
        ET.SubElement(item, "pubDate").text = format_datetime(entry.updated_at)

    return XML_DECLARATION + ET.tostring(rss, encoding="unicode")
