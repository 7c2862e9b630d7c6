"""Extractor for tangdou.com."""

from __future__ import annotations

from typing import Optional

from .. import request
from ..utils import match_one_of
from .types import Data, DataType, Extractor, Options, Part, Stream, URLParseFailed, empty_data

_DEFAULT_HEADERS = {
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "cross-site",
    "Sec-GPC": "1",
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:98.0) Gecko/20100101 Firefox/98.0",
}


def _download(uri: str) -> Data:
    try:
        html = request.get(uri, uri, _DEFAULT_HEADERS)
    except request.RequestError as exc:
        return empty_data(uri, exc)

    titles = match_one_of(
        html,
        r'<div class="title">(.+?)</div>',
        r'<meta name="description" content="(.+?)"',
        r"<title>(.+?)</title>",
    )
    if not titles or len(titles) < 2:
        return empty_data(uri, URLParseFailed())

    video_urls = match_one_of(
        html,
        r"video:'(.+?)'",
        r'video:"(.+?)"',
        r'<video[^>]*src="(.+?)"',
        r'play_url:\s*"(.+?)",',
    )
    if not video_urls or len(video_urls) < 2:
        return empty_data(uri, URLParseFailed())

    real_url = video_urls[1].replace("\\u002F", "/")
    try:
        file_size = request.size(real_url, uri)
    except request.RequestError as exc:
        return empty_data(uri, exc)

    streams = {
        "default": Stream(parts=[Part(url=real_url, size=file_size, ext="mp4")], size=file_size)
    }
    return Data(
        site="糖豆广场舞 tangdou.com",
        title=titles[1],
        type=DataType.VIDEO,
        streams=streams,
        url=uri,
    )


class TangdouExtractor(Extractor):
    """Extracts videos from tangdou.com; failures are recorded on the returned data."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        return [_download(url)]