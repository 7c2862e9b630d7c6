"""Extractor for vk.com videos."""

from __future__ import annotations

from typing import Optional

from .. import request
from ..utils import match_all, match_one_of
from .types import Data, DataType, Extractor, Options, Part, Stream, URLParseFailed

_QUALITY_NAMES = {
    0: "Highest",
    1: "High",
    2: "Medium",
    3: "Low",
    4: "Lowest",
    5: "Legacy",
}

# Cookies that make the mobile site serve high resolution sources.
_HIGH_RES_COOKIE = (
    "remixlang=0; remixaudio_show_alert_today=0; remixff=0; remixmdevice=1920/1080/1/!!-!!!!!!"
)
_SIZE_REFERER = "m.vk.vom"


def _mobile_url(url: str) -> str:
    # Links from the feed or search keep the video id in the z parameter.
    if "z=" in url:
        url = url.split("z=")[-1].split("%2F")[0]
    path = url.split("vk.com")[-1]
    if not path:
        raise URLParseFailed()
    if path.startswith("/"):
        path = path[1:]
    return "https://m.vk.com/" + path


def _sources(html: str) -> list[str]:
    sources = []
    for match in match_all(html, r"<source(.*?)/>"):
        src = match_one_of(match[1], r'src="(.*?)"')
        if not src:
            raise URLParseFailed()
        link = src[1].replace("&amp;", "&")
        # Technical previews hosted on vk.com itself are not real sources.
        if "vk.com" not in link:
            sources.append(link)
    return sources


class VKExtractor(Extractor):
    """Extracts videos from vk.com through its mobile site."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        url = _mobile_url(url)

        headers = dict(request.FAKE_HEADERS)
        headers["Cookie"] = headers.get("Cookie", "") + _HIGH_RES_COOKIE
        html = request.get(url, url, headers)

        titles = match_one_of(html, r'<h1 class="VideoPageInfoRow__title">(.*)</h1>')
        if not titles or len(titles) < 2:
            raise URLParseFailed()

        streams: dict[str, Stream] = {}
        for index, src in enumerate(_sources(html)):
            src_size = request.size(src, _SIZE_REFERER)
            name = _QUALITY_NAMES.get(index, "")
            streams[name] = Stream(
                parts=[Part(url=src, size=src_size, ext="mp4")],
                size=src_size,
                quality=name,
            )

        return [
            Data(
                site="VK vk.com",
                title=titles[1],
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]