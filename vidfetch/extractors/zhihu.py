"""Extractor for zhihu.com videos."""

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

_VIDEO_URL = "www.zhihu.com/zvideo"
_API = "https://lens.zhihu.com/api/v4/videos/"
_RESOLUTIONS = ("FHD", "HD", "SD")


def _obj(data: Any, key: str) -> dict:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


class ZhihuExtractor(Extractor):
    """Extracts videos from zhihu.com zvideo pages."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        if _VIDEO_URL not in url:
            raise URLParseFailed()

        html = request.get(url, url, None)
        video_id = match_one_of(html, r'"videoId":"(\d+)"')
        title_match = match_one_of(html, r"<title.*?>(.*?)</title>")
        if not video_id or len(video_id) <= 1:
            raise ExtractorError("zhihu video id extract failed")
        title = title_match[1] if title_match and len(title_match) > 1 else "Unknown"

        body = request.get_bytes(f"{_API}{video_id[1]}", url, None)
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise ExtractorError(f"invalid video response: {exc}") from exc

        playlist = _obj(payload, "playlist_v2")
        streams: dict[str, Stream] = {}
        for key in _RESOLUTIONS:
            resolution = _obj(playlist, key)
            res_size = int(resolution.get("size") or 0)
            streams[key] = Stream(
                parts=[
                    Part(
                        url=resolution.get("play_url", ""),
                        size=res_size,
                        ext=resolution.get("format", ""),
                    )
                ],
                size=res_size,
            )

        return [
            Data(
                site="知乎 zhihu.com",
                title=title,
                streams=streams,
                type=DataType.VIDEO,
                url=url,
            )
        ]