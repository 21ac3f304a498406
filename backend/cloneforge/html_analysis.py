"""Structural pass over the rendered HTML: images, links, fonts, libraries, meta tags."""

import re
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup

GOOGLE_FONT_HOSTS = ("fonts.googleapis.com", "fonts.google.com")
_FONT_FAMILY_RE = re.compile(r"family=([^&:]+)")

# Case-sensitive keyword -> library label, checked against the raw HTML
LIBRARY_KEYWORDS = [
    ("jquery", "jQuery"),
    ("bootstrap", "Bootstrap"),
    ("react", "React"),
    ("vue", "Vue.js"),
    ("angular", "Angular"),
    ("tailwind", "Tailwind CSS"),
]


@dataclass
class HtmlStructure:
    images: list[str] = field(default_factory=list)
    links: list[str] = field(default_factory=list)
    fonts: list[str] = field(default_factory=list)
    libraries: list[str] = field(default_factory=list)
    meta_tags: list[tuple[str, str]] = field(default_factory=list)
    description: Optional[str] = None


def detect_libraries(html: str) -> list[str]:
    return [label for keyword, label in LIBRARY_KEYWORDS if keyword in html]


def google_font_families(soup: BeautifulSoup) -> list[str]:
    """Family names from Google Fonts <link> tags, de-duplicated in first-seen order."""
    fonts = []
    for link in soup.find_all("link", href=True):
        href = link["href"]
        if not any(host in href for host in GOOGLE_FONT_HOSTS):
            continue
        match = _FONT_FAMILY_RE.search(href)
        if match:
            family = match.group(1).replace("+", " ")
            if family not in fonts:
                fonts.append(family)
    return fonts


def analyze_html(html: str) -> HtmlStructure:
    soup = BeautifulSoup(html, "html.parser")

    images = [img["src"] for img in soup.find_all("img") if img.get("src")]
    links = [a["href"] for a in soup.find_all("a") if a.get("href")]

    meta_tags = []
    description = None
    for meta in soup.find_all("meta"):
        name = meta.get("name") or meta.get("property")
        content = meta.get("content")
        if not name or content is None:
            continue
        meta_tags.append((name, content))
        if meta.get("name") == "description" and description is None:
            description = content

    return HtmlStructure(
        images=images,
        links=links,
        fonts=google_font_families(soup),
        libraries=detect_libraries(html),
        meta_tags=meta_tags,
        description=description,
    )
