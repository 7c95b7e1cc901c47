"""Curated feed URLs for sites whose feeds live somewhere unguessable.

Keys are matched as case-sensitive substrings of the configured site, in
table order, so more specific keys must come before broader ones.
"""

from typing import Tuple

KNOWN_FEEDS: Tuple[Tuple[str, str], ...] = (
    # Regional
    ("baltimoresun.com", "https://www.baltimoresun.com/arc/outboundfeeds/rss/?outputType=xml"),
    ("washingtonpost.com", "https://feeds.washingtonpost.com/rss/national"),
    ("chicagotribune.com", "https://www.chicagotribune.com/arc/outboundfeeds/rss/?outputType=xml"),
    ("latimes.com", "https://www.latimes.com/local/rss2.0.xml"),
    # National / wire
    ("nytimes.com", "https://rss.nytimes.com/services/xml/rss/nyt/HomePage.xml"),
    ("npr.org", "https://feeds.npr.org/1001/rss.xml"),
    ("apnews.com", "https://feedx.net/rss/ap.xml"),
    ("cnn.com", "http://rss.cnn.com/rss/cnn_topstories.rss"),
    # International
    ("bbc.co.uk", "https://feeds.bbci.co.uk/news/rss.xml"),
    ("bbc.com", "https://feeds.bbci.co.uk/news/rss.xml"),
    ("theguardian.com", "https://www.theguardian.com/world/rss"),
    ("aljazeera.com", "https://www.aljazeera.com/xml/rss/all.xml"),
    # Tech
    ("news.ycombinator.com", "https://news.ycombinator.com/rss"),
    ("arstechnica.com", "https://feeds.arstechnica.com/arstechnica/index"),
    ("theverge.com", "https://www.theverge.com/rss/index.xml"),
)
