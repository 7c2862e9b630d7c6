"""Extractor for reddit.com."""

from __future__ import annotations

from typing import Optional

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

_REFERER = "https://www.reddit.com"
_SITE_NAME = "Reddit reddit.com"
_MP4_API = "https://v.redd.it/"
_IMG_API = "https://i.redd.it/"
_AUDIO_URL_PART = "/DASH_audio.mp4"

_RESOLUTIONS = {
    "720p": "/DASH_720.mp4",
    "480p": "/DASH_480.mp4",
    "360p": "/DASH_360.mp4",
    "240p": "/DASH_240.mp4",
    "220p": "/DASH_220.mp4",
}

_I_REDD_IT_IMAGE = r'content":"https://i.redd.it/(.+?)","type":"image"'
_ANY_IMAGE = r'content":"(.+?)","type":"image"'


def _single(url: str, file_size: int, ext: str) -> dict[str, Stream]:
    return {"default": Stream(parts=[Part(url=url, size=file_size, ext=ext)], size=file_size)}


def _video(url: str, html: str, title: str) -> Data:
    match = match_one_of(html, r"https://v.redd.it/(.+?)/HLSPlaylist")
    if not match or not match[1]:
        raise ExtractorError("can't match mp4 content downloadable url")
    mp4_id = match[1]

    audio_url = f"{_MP4_API}{mp4_id}{_AUDIO_URL_PART}"
    audio = Part(url=audio_url, size=request.size(audio_url, _REFERER), ext="mp3")

    streams = {}
    for res, suffix in _RESOLUTIONS.items():
        res_url = f"{_MP4_API}{mp4_id}{suffix}"
        res_size = request.size(res_url, _REFERER)
        streams[res] = Stream(
            parts=[Part(url=res_url, size=res_size, ext="mp4"), audio],
            size=res_size + audio.size,
            quality=res,
            need_mux=True,
        )
    return Data(site=_SITE_NAME, title=title, type=DataType.VIDEO, streams=streams, url=url)


def _image(url: str, html: str, title: str) -> Data:
    match = match_one_of(html, _I_REDD_IT_IMAGE)
    if match:
        img_url = _IMG_API + match[1]
    else:
        match = match_one_of(html, _ANY_IMAGE)
        if not match:
            raise URLParseFailed()
        img_url = match[1].replace("auto=webp\\u0026s", "auto=webp&s")
    img_size = request.size(img_url, _REFERER)
    return Data(
        site=_SITE_NAME,
        title=title,
        type=DataType.IMAGE,
        streams=_single(img_url, img_size, "jpg"),
        url=url,
    )


def _gif(url: str, html: str, title: str) -> Data:
    match = match_one_of(html, r'https://preview\.redd\.it/.*?\.gif\?format=mp4.*?"')
    if not match or not match[0]:
        raise ExtractorError("can't match gif content downloadable url")
    gif_url = match[0].replace("&amp;", "&").replace('"', "")
    try:
        gif_size = request.size(gif_url, "reddit.com")
    except request.RequestError as exc:
        raise ExtractorError("can't get video size") from exc
    return Data(
        site=_SITE_NAME,
        title=title,
        type=DataType.VIDEO,
        streams=_single(gif_url, gif_size, "mp4"),
        url=url,
    )


class RedditExtractor(Extractor):
    """Extracts videos, images and gifs from reddit posts."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url, _REFERER, None)

        titles = match_one_of(html, r"<title>(.+?)</title>")
        if not titles:
            raise URLParseFailed()
        title = titles[1]

        if match_one_of(html, r'meta property="og:video" content=.*HLSPlaylist'):
            return [_video(url, html, title)]
        if match_one_of(html, r'<meta property="og:type" content="image"/>'):
            return [_image(url, html, title)]
        if match_one_of(html, r"https://preview\.redd\.it/.*gif"):
            return [_gif(url, html, title)]
        raise ExtractorError(f"unable to handle url: {url}")