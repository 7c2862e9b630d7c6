"""Extractor for yinyuetai.com music videos."""

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

_API = "https://ext.yinyuetai.com/main/"
_ACTION_GET_MV_INFO = "get-h-mv-info"


def _obj(data: Any, key: str) -> dict:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def gen_api(action: str, param: str) -> str:
    """Return the API address for an action and its query parameters."""
    return f"{_API}{action}?json=true&{param}"


class YinyuetaiExtractor(Extractor):
    """Extracts music videos from yinyuetai.com."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        vid = match_one_of(
            url,
            r"https?://v.yinyuetai.com/video/(\d+)(?:\?vid=\d+)?",
            r"https?://v.yinyuetai.com/video/h5/(\d+)(?:\?vid=\d+)?",
            r"https?://m2.yinyuetai.com/video.html\?id=(\d+)",
        )
        if not vid or len(vid) < 2:
            raise ExtractorError("invalid url for yinyuetai")

        api_url = gen_api(_ACTION_GET_MV_INFO, f"videoId={vid[1]}")
        body = request.get(api_url, url, None)
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise URLParseFailed() from exc
        if not isinstance(payload, dict):
            raise URLParseFailed()

        if payload.get("error"):
            raise ExtractorError(payload.get("message", ""))
        core = _obj(_obj(payload, "videoInfo"), "coreVideoInfo")
        if core.get("error"):
            raise ExtractorError(core.get("errorMsg", ""))

        streams: dict[str, Stream] = {}
        for model in core.get("videoURLModels") or []:
            if not isinstance(model, dict):
                continue
            file_size = int(model.get("fileSize") or 0)
            streams[model.get("qualityLevel", "")] = Stream(
                parts=[Part(url=model.get("videoURL", ""), size=file_size, ext="mp4")],
                size=file_size,
                quality=model.get("qualityLevelName", ""),
            )

        return [
            Data(
                site="音悦台 yinyuetai.com",
                title=core.get("videoName", ""),
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]