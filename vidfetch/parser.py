"""HTML helpers for pulling titles and images out of pages."""

from __future__ import annotations

from typing import Callable, Optional

from bs4 import BeautifulSoup


def get_doc(html: str) -> BeautifulSoup:
    """Parse an HTML string into a document."""
    return BeautifulSoup(html, "html.parser", multi_valued_attributes=None)


def get_images(
    html: str,
    img_class: str,
    url_handler: Optional[Callable[[str], str]] = None,
) -> tuple[str, list[str]]:
    """Return the page title and the sources of images whose class is exactly img_class."""
    doc = get_doc(html)
    urls = []
    for img in doc.find_all("img"):
        if img.get("class") != img_class:
            continue
        url = img.get("src", "")
        if url_handler is not None:
            url = url_handler(url)
        urls.append(url)
    return title(doc), urls


def title(doc: BeautifulSoup) -> str:
    """Return the page title from the first h1, og:title or the title tag."""
    h1 = doc.find("h1")
    h1_title = ""
    if h1 is not None:
        h1_title = h1.get("title")
        if h1_title is None:
            h1_title = h1.get_text()
    result = h1_title.strip().replace("\n", "")
    if not result:
        meta = doc.find("meta", attrs={"property": "og:title"})
        if meta is not None:
            result = meta.get("content", "")
    if not result:
        result = "".join(tag.get_text() for tag in doc.find_all("title"))
    return result