"""Extractor for tumblr.com."""

from __future__ import annotations

import json
from typing import Optional

from .. import parser, request
from ..utils import get_name_and_ext, match_one_of
from .types import (
    Data,
    DataType,
    Extractor,
    ExtractorError,
    Options,
    Part,
    Stream,
    URLParseFailed,
)

_SITE = "Tumblr tumblr.com"


def _gen_part(url: str, referer: str) -> Part:
    part_size = request.size(url, referer)
    _, ext = get_name_and_ext(url)
    return Part(url=url, size=part_size, ext=ext)


def _load(text: str) -> dict:
    try:
        value = json.loads(text)
    except ValueError as exc:
        raise ExtractorError(f"invalid ld+json payload: {exc}") from exc
    return value if isinstance(value, dict) else {}


def _image_download(url: str, html: str, title: str) -> list[Data]:
    match = match_one_of(html, r'<script type="application/ld\+json">\s*(.+?)</script>')
    if not match or len(match) < 2:
        raise URLParseFailed()
    payload_text = match[1]
    payload = _load(payload_text)

    # The image field is either a list wrapper or a single URL.
    if '"image":{"@list"' in payload_text:
        image = payload.get("image")
        urls = (image.get("@list") if isinstance(image, dict) else None) or []
    else:
        image = payload.get("image", "")
        urls = [image if isinstance(image, str) else ""]

    parts = [_gen_part(image_url, url) for image_url in urls]
    streams = {"default": Stream(parts=parts, size=sum(part.size for part in parts))}
    return [Data(site=_SITE, title=title, type=DataType.IMAGE, streams=streams, url=url)]


def _video_download(url: str, html: str, title: str) -> list[Data]:
    match = match_one_of(html, r"<iframe src='(.+?)'")
    if not match or len(match) < 2:
        raise URLParseFailed()
    video_url = match[1]
    if "tumblr.com/video" not in video_url:
        raise ExtractorError("this URL is not supported right now")

    video_html = request.get(video_url, url, None)
    sources = match_one_of(video_html, r'source src="(.+?)"')
    if not sources or len(sources) < 2:
        raise URLParseFailed()

    part = _gen_part(sources[1], url)
    streams = {"default": Stream(parts=[part], size=part.size)}
    return [Data(site=_SITE, title=title, type=DataType.VIDEO, streams=streams, url=url)]


class TumblrExtractor(Extractor):
    """Extracts images and videos from tumblr posts."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url, url, None)
        title = parser.title(parser.get_doc(html))
        if "<iframe src=" in html:
            return _video_download(url, html, title)
        return _image_download(url, html, title)