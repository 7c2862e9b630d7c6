"""Extractor for rumble.com."""

from __future__ import annotations

import contextlib
import json
import re
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

from .. import request
from ..utils import m3u8_urls, match_one_of
from .types import (
    Data,
    DataType,
    Extractor,
    ExtractorError,
    Options,
    Part,
    Stream,
    URLParseFailed,
    URLQueryParamsParseFailed,
)

_PAYLOAD_PATTERN = r'<script\stype="?application/ld\+json"?>(.+?)</script>'
_EMBED_API = (
    "https://rumble.com/embedJS/u3/?request=video&ver=2&v={}"
    '&ext={{"ad_count":null}}&ad_wt=0'
)
_RESOLUTION = re.compile(r"_(\d{3,4})p/", re.ASCII)  # e.g. _720p/
_MP4_QUALITIES = ("240", "360", "480", "720", "1080", "1440", "2160", "2161")

# Failures of the optional live and new-style VOD streams are not fatal.
_IGNORED = (ExtractorError, request.RequestError, ValueError)


def _obj(data: Any, key: str) -> dict:
    value = data.get(key) if isinstance(data, Mapping) else None
    return value if isinstance(value, dict) else {}


def _meta_int(info: Mapping, key: str) -> int:
    try:
        return int(_obj(info, "meta").get(key) or 0)
    except (TypeError, ValueError):
        return 0


def _url_of(info: Mapping) -> str:
    value = info.get("url", "") if isinstance(info, Mapping) else ""
    return value if isinstance(value, str) else ""


def read_payload(html: str) -> dict:
    """Return the VideoObject entry of the page's ld+json payload."""
    match = match_one_of(html, _PAYLOAD_PATTERN)
    if not match:
        raise URLQueryParamsParseFailed()
    try:
        entries = json.loads(match[1])
    except ValueError as exc:
        raise ExtractorError(f"invalid ld+json payload: {exc}") from exc
    if not isinstance(entries, list):
        raise ExtractorError("invalid ld+json payload: expected a list")
    for entry in entries:
        if isinstance(entry, dict) and entry.get("@type") == "VideoObject":
            return entry
    raise URLParseFailed()


def _path_base(path: str) -> str:
    if not path:
        return "."
    trimmed = path.rstrip("/")
    if not trimmed:
        return "/"
    return trimmed.rsplit("/", 1)[-1]


def get_video_id(embed_url: str) -> str:
    """Return the last path element of the embed URL."""
    try:
        path = urlsplit(embed_url).path
    except ValueError as exc:
        raise URLParseFailed() from exc
    return _path_base(path)


def make_stream_meta(quality: str, ext: str, info: Mapping) -> Stream:
    """Build a single-part stream from a stream description."""
    file_size = _meta_int(info, "size")
    part = Part(url=_url_of(info), size=file_size, ext=ext)
    return Stream(parts=[part], size=file_size, quality=quality)


def _add_live_streams(streams: dict[str, Stream], auto: Mapping) -> None:
    playlists = m3u8_urls(_url_of(auto))
    if not playlists:
        raise URLParseFailed()

    # Pick the playlist with the highest resolution.
    playlist_url = playlists[0]
    max_res = 0
    for candidate in playlists:
        matched = _RESOLUTION.search(candidate)
        if not matched:
            continue
        res = int(matched.group(1))
        if max_res < res:
            max_res = res
            playlist_url = candidate

    live_size = _meta_int(auto, "size")
    parts = [Part(url=ts, size=live_size, ext="ts") for ts in m3u8_urls(playlist_url)]
    streams["hls"] = Stream(parts=parts, size=live_size, quality=str(max_res))


def _add_new_vod_streams(streams: dict[str, Stream], tar: Mapping) -> None:
    for key, details in tar.items():
        details = details if isinstance(details, dict) else {}
        playlists = m3u8_urls(_url_of(details))
        if not playlists:
            raise URLParseFailed()
        vod_size = _meta_int(details, "size")
        streams[key] = Stream(
            parts=[Part(url=url, size=vod_size, ext="ts") for url in playlists],
            size=vod_size,
            quality=str(_meta_int(details, "h")),
        )


def _fetch_video_quality(video_id: str) -> dict[str, Stream]:
    body = request.get(_EMBED_API.format(video_id))
    try:
        response = json.loads(body)
    except ValueError as exc:
        raise URLParseFailed() from exc
    ua = response.get("ua") if isinstance(response, dict) else None
    if not isinstance(ua, dict):
        raise URLParseFailed()

    mp4 = _obj(ua, "mp4")
    webm = _obj(ua, "webm")
    streams: dict[str, Stream] = {
        "webm": make_stream_meta("480", "webm", _obj(webm, "480"))
    }
    for quality in _MP4_QUALITIES:
        streams[quality] = make_stream_meta(quality, "mp4", _obj(mp4, quality))

    with contextlib.suppress(*_IGNORED):
        _add_live_streams(streams, _obj(_obj(ua, "hls"), "auto"))
    with contextlib.suppress(*_IGNORED):
        _add_new_vod_streams(streams, _obj(ua, "tar"))
    return streams


class RumbleExtractor(Extractor):
    """Extracts videos from rumble.com."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url)
        match = match_one_of(html, r"<title>(.+?)</title>")
        title = match[1] if match and len(match) > 1 else "rumble video"

        payload = read_payload(html)
        embed_url = payload.get("embedUrl", "")
        video_id = get_video_id(embed_url if isinstance(embed_url, str) else "")
        streams = _fetch_video_quality(video_id)

        return [
            Data(
                site="Rumble rumble.com",
                title=title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]