"""Extractor for video.udn.com."""

from __future__ import annotations

import re
from typing import Optional

from .. import request
from ..utils import match_one_of
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

_EMBED_PREFIX = "https://video.udn.com/embed/"
_START_FLAG = "',\n            mp4: '//"
_END_FLAG = "'\n        },\n        subtitles"
_CDN_PATTERN = re.escape(_START_FLAG) + "(.+?)" + re.escape(_END_FLAG)
_TITLE_PATTERN = r"title: '(.+?)',\n        link:"


def get_cdn_url(html: str) -> str:
    """Return the CDN address of the video source, or an empty string."""
    match = match_one_of(html, _CDN_PATTERN)
    if match and len(match) > 1 and match[1]:
        return match[1]
    return ""


def prepare_embed_url(url: str) -> str:
    """Turn a udn video URL into its embed page URL."""
    if _EMBED_PREFIX not in url:
        return _EMBED_PREFIX + "news/" + url.split("/")[-1]
    return url


class UdnExtractor(Extractor):
    """Extracts videos from video.udn.com."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        url = prepare_embed_url(url)
        if not url:
            raise URLParseFailed()

        html = request.get(url, url, None)
        desc = match_one_of(html, _TITLE_PATTERN)
        title = desc[1] if desc and len(desc) > 1 else "udn"

        cdn_url = get_cdn_url(html)
        if not cdn_url:
            raise ExtractorError("empty list")
        src_url = request.get("http://" + cdn_url, url, None)
        file_size = request.size(src_url, url)

        quality = "normal"
        streams = {
            quality: Stream(
                parts=[Part(url=src_url, size=file_size, ext="mp4")],
                size=file_size,
                quality=quality,
            )
        }
        return [
            Data(
                site="udn udn.com",
                title=title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]