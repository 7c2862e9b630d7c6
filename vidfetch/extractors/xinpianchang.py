"""Extractor for xinpianchang.com."""

from __future__ import annotations

import json
from typing import Any, Optional

from .. import request
from ..utils import match_one_of
from .types import Data, DataType, Extractor, ExtractorError, Options, Part, Stream, URLParseFailed

_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:98.0) Gecko/20100101 Firefox/98.0",
}
_MEDIA_API = "https://mod-api.xinpianchang.com/mod/api/v2/media/{}?appKey={}"


def _required(html: str, pattern: str) -> str:
    match = match_one_of(html, pattern)
    if not match:
        raise URLParseFailed()
    return match[1]


def _field(obj: dict, key: str) -> Any:
    if not isinstance(obj, dict):
        raise ExtractorError(f"cannot index {type(obj).__name__} with {key!r}")
    return obj.get(key)


def _streams(progressive: Any) -> dict[str, Stream]:
    if not isinstance(progressive, list):
        raise ExtractorError("cannot iterate over progressive resources")
    streams: dict[str, Stream] = {}
    for entry in progressive:
        quality = _field(entry, "quality") or ""
        file_size = int(_field(entry, "filesize") or 0)
        mime = _field(entry, "mime") or ""
        if "/" not in mime:
            raise ExtractorError(f"unexpected mime type {mime!r}")
        streams[quality] = Stream(
            size=file_size,
            quality=quality,
            parts=[
                Part(url=_field(entry, "url") or "", size=file_size, ext=mime.split("/")[1])
            ],
        )
    return streams


class XinpianchangExtractor(Extractor):
    """Extracts videos from xinpianchang.com."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url, url, _HEADERS)
        vid = _required(html, r'vid = "(.+?)";')
        app_key = _required(html, r'modeServerAppKey = "(.+?)";')

        body = request.get(_MEDIA_API.format(vid, app_key), url, _HEADERS)
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise ExtractorError(f"invalid media response: {exc}") from exc

        data = _field(payload, "data") or {}
        title = _field(data, "title") or ""
        resource = _field(data, "resource") or {}
        streams = _streams(_field(resource, "progressive"))

        return [
            Data(
                site="新片场 xinpianchang.com",
                title=str(title),
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]