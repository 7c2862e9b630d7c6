"""Extractor for xvideos.com."""

from __future__ import annotations

from typing import NamedTuple, Optional

from .. import request
from ..utils import match_one_of
from .types import Data, DataType, Extractor, Options, Part, Stream, URLParseFailed

_LOW_FLAG = "html5player.setVideoUrlLow('"
_LOW_FINAL_FLAG = "');\n\t    html5player.setVideoUrlHigh("
_HIGH_FLAG = "html5player.setVideoUrlHigh('"
_HIGH_FINAL_FLAG = "');\n\t    html5player.setVideoHLS("
_QUALITY_LOW = "low"
_QUALITY_HIGH = "high"


class _Source(NamedTuple):
    url: str
    quality: str


def _between(html: str, start_flag: str, end_flag: str) -> str:
    start = html.find(start_flag)
    end = html.find(end_flag)
    if start < 0 or end < 0:
        raise URLParseFailed()
    start += len(start_flag)
    if end < start:
        raise URLParseFailed()
    return html[start:end]


def get_src(html: str) -> list[_Source]:
    """Return the low and high quality video sources found in the player script."""
    return [
        _Source(_between(html, _LOW_FLAG, _LOW_FINAL_FLAG), _QUALITY_LOW),
        _Source(_between(html, _HIGH_FLAG, _HIGH_FINAL_FLAG), _QUALITY_HIGH),
    ]


class XvideosExtractor(Extractor):
    """Extracts videos from xvideos.com."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url, url, None)
        desc = match_one_of(html, r"<title>(.+?)</title>")
        title = desc[1] if desc and len(desc) > 1 else "xvideos"

        streams: dict[str, Stream] = {}
        for source in get_src(html):
            source_size = request.size(source.url, url)
            streams[source.quality] = Stream(
                parts=[Part(url=source.url, size=source_size, ext="mp4")],
                size=source_size,
                quality=source.quality,
            )

        return [
            Data(
                site="XVIDEOS xvideos.com",
                title=title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]