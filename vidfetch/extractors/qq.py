"""Extractor for v.qq.com."""

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

_PLAYER_VERSION = "3.2.19.333"
_JSON_PATTERN = r"QZOutputJson=(.+);$"
_DIRECT_FORMATS = ("shd", "fhd")


def _obj(data: Any, key: str) -> dict:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def _qz_json(html: str) -> dict:
    match = match_one_of(html, _JSON_PATTERN)
    if not match or len(match) < 2:
        raise URLParseFailed()
    return json.loads(match[1])


def _get_vinfo(vid: str, defn: str, refer: str) -> dict:
    html = request.get(
        "http://vv.video.qq.com/getinfo?otype=json&platform=11&defnpayver=1"
        f"&appver={_PLAYER_VERSION}&defn={defn}&vid={vid}",
        refer,
        None,
    )
    return _qz_json(html)


def _first_video(info: dict) -> dict:
    videos = _obj(info, "vl").get("vi") or []
    if not videos:
        raise URLParseFailed()
    return videos[0]


def _clip_count(video: dict) -> int:
    return int(_obj(video, "cl").get("fc") or 0) or 1


def _gen_streams(vid: str, cdn: str, info: dict) -> dict[str, Stream]:
    video = _first_video(info)
    streams: dict[str, Stream] = {}
    for fmt in _obj(info, "fl").get("fi") or []:
        name = fmt.get("name", "")
        fmt_id = int(fmt.get("id") or 0)
        if name in _DIRECT_FORMATS:
            numbered = True
            fns = [video.get("fn", "").split(".")[0], f"p{fmt_id % 10000}", "mp4"]
            clips = _clip_count(video)
        else:
            other = _first_video(_get_vinfo(vid, name, cdn))
            fns = other.get("fn", "").split(".")
            numbered = len(fns) >= 3 and match_one_of(fns[1], r"^p(\d{3})$") is not None
            clips = _clip_count(other)

        parts = []
        for clip in range(1, clips + 1):
            if numbered:
                # n0687peq62x.p709.mp4 -> n0687peq62x.p709.1.mp4
                if len(fns) < 4:
                    fns.insert(2, str(clip))
                else:
                    fns[2] = str(clip)
            filename = ".".join(fns)
            key_info = _qz_json(
                request.get(
                    "http://vv.video.qq.com/getkey?otype=json&platform=11"
                    f"&appver={_PLAYER_VERSION}&filename={filename}&format={fmt_id}&vid={vid}",
                    "",
                    None,
                )
            )
            vkey = key_info.get("key") or video.get("fvkey", "")
            real_url = f"{cdn}{filename}?vkey={vkey}"
            parts.append(Part(url=real_url, size=request.size(real_url, cdn), ext="mp4"))

        streams[name] = Stream(
            parts=parts,
            size=sum(part.size for part in parts),
            quality=fmt.get("cname", ""),
        )
    return streams


class QQExtractor(Extractor):
    """Extracts videos from v.qq.com."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        vids = match_one_of(url, r"vid=(\w+)", r"/(\w+)\.html")
        if not vids or len(vids) < 2:
            raise URLParseFailed()
        vid = vids[1]

        if len(vid) != 11:
            page = request.get(url, url, None)
            vids = match_one_of(
                page, r"vid=(\w+)", r"vid:\s*[\"'](\w+)", r"vid\s*=\s*[\"']\s*(\w+)"
            )
            if not vids or len(vids) < 2:
                raise URLParseFailed()
            vid = vids[1]

        info = _get_vinfo(vid, "shd", url)
        if info.get("msg"):
            raise ExtractorError(info["msg"])
        video = _first_video(info)
        hosts = _obj(video, "ul").get("ui") or []
        if not hosts:
            raise URLParseFailed()
        cdn = hosts[0].get("url", "")
        streams = _gen_streams(vid, cdn, info)

        return [
            Data(
                site="腾讯视频 v.qq.com",
                title=video.get("ti", ""),
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]