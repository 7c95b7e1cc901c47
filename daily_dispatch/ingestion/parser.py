"""Tolerant RSS/Atom parsing.

Feeds in the wild are frequently not well-formed XML (unescaped ampersands,
stray HTML, truncated documents), so articles are pulled out with regular
expressions instead of a structural parser. Anything that cannot be matched
is skipped; nothing here raises on bad input.
"""

import html
import re
from functools import lru_cache
from typing import List, Optional, Sequence

from .interfaces import Article
from ..config.settings import settings

# <item> for RSS, <entry> for Atom; attributes allowed on the opening tag
BLOCK_RE = re.compile(
    r"<(item|entry)(?:\s[^>]*)?>(.*?)</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
# Only tag-shaped text: a bare "3 < 5 and 7 > 2" is left alone
TAG_RE = re.compile(r"</?[A-Za-z!][^<>]*>")
CDATA_SECTION_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)
HREF_RE = re.compile(r'href="([^"]*)"', re.IGNORECASE)

DESCRIPTION_TAGS = ("description", "summary", "content")
DATE_TAGS = ("pubDate", "published", "updated")


@lru_cache(maxsize=None)
def _field_patterns(tag: str):
    # (?<!/) keeps self-closing tags such as Atom's <link href="..."/> from opening a match
    open_tag = rf"<{re.escape(tag)}(?:\s[^>]*?)?(?<!/)>"
    close_tag = rf"</{re.escape(tag)}\s*>"
    cdata = re.compile(
        rf"{open_tag}\s*<!\[CDATA\[(.*?)\]\]>\s*{close_tag}",
        re.IGNORECASE | re.DOTALL,
    )
    plain = re.compile(rf"{open_tag}(.*?){close_tag}", re.IGNORECASE | re.DOTALL)
    return cdata, plain


def strip_tags(text: str) -> str:
    return TAG_RE.sub("", text).strip()


def _decode_plain(text: str) -> str:
    # markup, then entities, then markup that was entity-escaped (&lt;p&gt;)
    return TAG_RE.sub("", html.unescape(TAG_RE.sub("", text)))


def clean_plain_text(text: str) -> str:
    """Text of a non-CDATA field body.

    Embedded CDATA sections are kept literally; the text around them is
    stripped of markup and entity-decoded.
    """
    parts = []
    pos = 0
    for match in CDATA_SECTION_RE.finditer(text):
        parts.append(_decode_plain(text[pos:match.start()]))
        parts.append(TAG_RE.sub("", match.group(1)))
        pos = match.end()
    parts.append(_decode_plain(text[pos:]))
    return "".join(parts).strip()


def extract_field(block: str, tag: str) -> str:
    """Extract one field's text from an item block.

    CDATA content is taken literally; plain content is stripped of markup
    before its XML entities are decoded, so escaped ``&lt;`` and ``&gt;``
    survive as text. Nested markup is stripped from either.
    """
    cdata, plain = _field_patterns(tag)

    match = cdata.search(block)
    if match:
        return strip_tags(match.group(1))

    match = plain.search(block)
    if match:
        return clean_plain_text(match.group(1))

    return ""


def _first_field(block: str, tags: Sequence[str]) -> str:
    for tag in tags:
        value = extract_field(block, tag)
        if value:
            return value
    return ""


def _extract_link(block: str) -> str:
    link = extract_field(block, "link")
    if link:
        return link
    match = HREF_RE.search(block)
    return html.unescape(match.group(1)).strip() if match else ""


def parse_item(block: str, description_max_chars: int = None) -> Optional[Article]:
    """Parse one <item>/<entry> body into an Article, or None without a title."""
    title = extract_field(block, "title")
    if not title:
        return None

    max_chars = description_max_chars or settings.description_max_chars
    return Article(
        title=title,
        description=_first_field(block, DESCRIPTION_TAGS)[:max_chars],
        link=_extract_link(block),
        pub_date=_first_field(block, DATE_TAGS),
    )


def parse_feed(text: str, description_max_chars: int = None) -> List[Article]:
    """Extract articles from feed markup, in document order.

    Returned articles have no source yet; the caller knows which site the
    feed belongs to.
    """
    if not text:
        return []

    articles = []
    for match in BLOCK_RE.finditer(text):
        article = parse_item(match.group(2), description_max_chars)
        if article:
            articles.append(article)
    return articles
