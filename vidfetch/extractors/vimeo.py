"""Extractor for vimeo.com."""

from __future__ import annotations

import json
from typing import Any, Optional

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

_PLAYER_URL = "https://player.vimeo.com/video/"
_CONFIG_PATTERN = r"var \w+\s?=\s?({.+?});"


def _obj(data: Any, key: str) -> dict:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def _player_html(url: str) -> str:
    if "player.vimeo.com" in url:
        return request.get(url, url, None)
    match = match_one_of(url, r"vimeo\.com/(\d+)")
    if not match:
        raise URLParseFailed()
    return request.get(_PLAYER_URL + match[1], url, None)


class VimeoExtractor(Extractor):
    """Extracts the progressive video files of a vimeo video."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = _player_html(url)
        match = match_one_of(html, _CONFIG_PATTERN)
        if not match or len(match) < 2:
            raise URLParseFailed()
        try:
            config = json.loads(match[1])
        except ValueError as exc:
            raise ExtractorError(f"invalid player config: {exc}") from exc

        progressive = _obj(_obj(config, "request"), "files").get("progressive") or []
        streams: dict[str, Stream] = {}
        for video in progressive:
            if not isinstance(video, dict):
                continue
            video_url = video.get("url", "")
            video_size = request.size(video_url, url)
            streams[str(video.get("profile", ""))] = Stream(
                parts=[Part(url=video_url, size=video_size, ext="mp4")],
                size=video_size,
                quality=video.get("quality", ""),
            )

        return [
            Data(
                site="Vimeo vimeo.com",
                title=_obj(config, "video").get("title", ""),
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]