"""Extractor for tiktok.com."""

from __future__ import annotations

import re
from typing import Optional

from .. import request
from .types import Data, DataType, Extractor, Options, Part, Stream, URLParseFailed

_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:98.0) Gecko/20100101 Firefox/98.0",
}
_DOWNLOAD_ADDR = re.compile(r'"downloadAddr":\s*"([^"]+)"')
_TITLE = re.compile(r"<title[^>]*>([^<]+)</title>")
_DESC = re.compile(r'"desc":"([^"]*)"')
_GENERIC_TITLE = "TikTok - Make Your Day"
_DESC_LIMIT = 64


def _shorten(desc: str) -> str:
    # The limit counts UTF-8 bytes; the cut falls on the last space before it.
    encoded = desc.encode("utf-8")
    if len(encoded) <= _DESC_LIMIT:
        return desc
    last_space = encoded[:_DESC_LIMIT].rfind(b" ")
    if last_space < 0:
        raise URLParseFailed()
    return encoded[:last_space].decode("utf-8")


class TikTokExtractor(Extractor):
    """Extracts videos from tiktok.com."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url, url, _HEADERS)

        download = _DOWNLOAD_ADDR.search(html)
        if not download:
            raise URLParseFailed()
        video_url = download.group(1).replace("\\u002F", "/")

        title_match = _TITLE.search(html)
        if not title_match:
            raise URLParseFailed()
        title = title_match.group(1)

        if title == _GENERIC_TITLE:
            desc = _DESC.search(html)
            if not desc:
                raise URLParseFailed()
            title = _shorten(desc.group(1))

        pieces = title.split("|")
        if len(pieces) > 1:
            title = "|".join(pieces[:-1]).strip()

        video_size = request.size(video_url, url)
        streams = {
            "default": Stream(
                parts=[Part(url=video_url, size=video_size, ext="mp4")], size=video_size
            )
        }
        return [
            Data(
                site="TikTok tiktok.com",
                title=title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]