"""Extractor for youku.com."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import random
import struct
import time
from typing import Any, Optional
from urllib.parse import quote_plus

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

_REFERER = "https://v.youku.com"
_COOKIE_ENDPOINT = "http://log.mmstat.com/eg.js"
_UPS_API = "https://ups.youku.com/ups/get.json"
_UTDID_CCODE = "0103010102"
_UTDID_HMAC_SALT = b"d6fc3a4a06adbde89223bvefedc24fecde188aaa9161"

_AUDIO_LANGS = {
    "guoyu": "国语",
    "ja": "日语",
    "yue": "粤语",
}


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _obj(data: Any, key: str) -> dict:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def get_audio_lang(lang: str) -> str:
    """Return the display name of an audio language code, or the code itself."""
    return _AUDIO_LANGS.get(lang, lang)


def hash_code(s: str) -> int:
    """Return the 32-bit signed string hash (31 * h + c over code points)."""
    result = 0
    for char in s:
        result = _int32(result * 0x1F + ord(char))
    return result


def _be32(value: int) -> bytes:
    return struct.pack(">i", _int32(value))


def generate_utdid() -> str:
    """Generate a random device identifier in the format the player uses."""
    timestamp = _int32(int(time.time()))
    buffer = bytearray()
    buffer += _be32(timestamp - 60 * 60 * 8)
    buffer += _be32(random.randrange(2**31))
    buffer += b"\x03\x00"
    imei = str(random.randrange(2**31))
    buffer += _be32(hash_code(imei))
    digest = hmac.new(_UTDID_HMAC_SALT, bytes(buffer), hashlib.sha1).digest()
    buffer += _be32(hash_code(base64.b64encode(digest).decode("ascii")))
    return base64.b64encode(bytes(buffer)).decode("ascii")


def _utid_from_cookie(option: Options) -> str:
    if "cna" in option.cookie:
        utids = match_one_of(option.cookie, r"cna=(.+?);", r"cna\s+(.+?)\s", r"cna\s+(.+?)$")
    else:
        set_cookie = request.headers(_COOKIE_ENDPOINT, _REFERER).get("Set-Cookie", "")
        utids = match_one_of(set_cookie, r"cna=(.+?);")
    if not utids or len(utids) < 2:
        raise URLParseFailed()
    return utids[1]


def _youku_ups(vid: str, option: Options) -> dict:
    utid = _utid_from_cookie(option)
    ccode = option.youku_ccode
    if ccode == _UTDID_CCODE:
        utid = generate_utdid()
    url = (
        f"{_UPS_API}?vid={vid}&ccode={ccode}&client_ip=192.168.1.1"
        f"&client_ts={int(time.time()) // 1000}&utid={quote_plus(utid)}"
        f"&ckey={quote_plus(option.youku_ckey)}"
    )
    if option.youku_password:
        url = f"{url}&password={option.youku_password}"
    body = request.get_bytes(url, _REFERER, None)
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise ExtractorError(f"invalid ups response: {exc}") from exc
    return _obj(payload, "data")


def gen_data(data: dict) -> dict[str, Stream]:
    """Build the streams described by the ups "data" object."""
    streams: dict[str, Stream] = {}
    for entry in data.get("stream") or []:
        stream_type = entry.get("stream_type", "")
        audio_lang = entry.get("audio_lang", "")
        width = entry.get("width", 0)
        height = entry.get("height", 0)
        if audio_lang == "default":
            key = stream_type
            quality = f"{stream_type} {width}x{height}"
        else:
            key = f"{stream_type}-{audio_lang}"
            quality = f"{stream_type} {width}x{height} {get_audio_lang(audio_lang)}"

        segs = entry.get("segs") or []
        if not segs:
            raise URLParseFailed()
        ext = segs[0].get("cdn_url", "").split("?")[0].split(".")[-1]
        parts = [
            Part(url=seg.get("cdn_url", ""), size=int(seg.get("size") or 0), ext=ext)
            for seg in segs
        ]
        streams[key] = Stream(parts=parts, size=int(entry.get("size") or 0), quality=quality)
    return streams


class YoukuExtractor(Extractor):
    """Extracts videos from youku.com."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        option = option or Options()
        vids = match_one_of(url, r"id_(.+?)\.html", r"id_(.+)")
        if not vids or len(vids) < 2:
            raise URLParseFailed()

        data = _youku_ups(vids[1], option)
        error = _obj(data, "error")
        if int(error.get("code") or 0) != 0:
            raise ExtractorError(error.get("note", ""))

        streams = gen_data(data)
        video_title = _obj(data, "video").get("title", "")
        show_title = _obj(data, "show").get("title", "")
        if not show_title or show_title in video_title:
            title = video_title
        else:
            title = f"{show_title} {video_title}"

        return [
            Data(
                site="优酷 youku.com",
                title=title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]