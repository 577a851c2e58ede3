"""First-post extraction from blog index pages."""

from typing import Optional
from urllib.parse import urljoin, urlparse
from bs4 import BeautifulSoup
from ..schemas.notifications import BlogPost

# Tried together; the first match in document order wins.
POST_SELECTORS = ["h2 a", ".post-title a", ".entry-title a"]

def normalize_link(href: str, source_url: str) -> str:
    """
    Makes a post href absolute.
    http(s) links pass through, root-relative links are resolved against the
    source origin, anything else is appended to the source URL as-is.
    """
    if href.startswith("http"):
        return href
    if href.startswith("/"):
        return urljoin(source_url, href)
    return f"{source_url}{href}"

def extract_first_post(html: str, source_url: str) -> Optional[BlogPost]:
    soup = BeautifulSoup(html, "html.parser")
    anchor = soup.select_one(", ".join(POST_SELECTORS))
    if anchor is None:
        return None

    href = anchor.get("href")
    if not href:
        return None

    return BlogPost(
        title=anchor.get_text().strip(),
        link=normalize_link(href, source_url),
        source_host=urlparse(source_url).hostname or "",
    )
