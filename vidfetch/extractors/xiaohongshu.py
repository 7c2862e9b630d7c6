"""Extractor for xiaohongshu.com."""

from __future__ import annotations

import json
from typing import Optional
from urllib.parse import urlsplit

from .. import request
from ..utils import match_one_of
from .types import BodyParseFailed, Data, DataType, Extractor, Options, Part, Stream

_MP4 = "mp4"


def _backup_urls(html: str) -> list[str]:
    match = match_one_of(html, r'"backupUrls":(\[.+?\])')
    if not match or len(match) != 2:
        raise BodyParseFailed()
    try:
        urls = json.loads(match[1])
    except ValueError as exc:
        raise BodyParseFailed() from exc
    if not isinstance(urls, list) or not all(isinstance(u, str) for u in urls):
        raise BodyParseFailed()
    return urls


class XiaohongshuExtractor(Extractor):
    """Extracts videos from xiaohongshu.com notes."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url, url, request.FAKE_HEADERS)

        titles = match_one_of(html, r"<title>(.*?)</title>")
        if not titles or len(titles) != 2:
            raise BodyParseFailed()
        title = titles[1]

        urls = _backup_urls(html)
        short_link = urlsplit(url).netloc == "xhslink.com"

        streams: dict[str, Stream] = {}
        last_error: Optional[Exception] = None
        for index, video_url in enumerate(urls):
            if _MP4 not in video_url:
                continue
            try:
                video_size = request.size(video_url, video_url)
            except request.RequestError as exc:
                last_error = exc
                continue
            last_error = None
            if short_link and "sns-video-qc" in video_url:
                # Prefer this downloadable link over others of the same size.
                video_size += 1
            streams[str(index)] = Stream(
                parts=[Part(url=video_url, size=video_size, ext=_MP4)],
                size=video_size,
            )

        if last_error is not None:
            raise last_error
        if not streams:
            raise BodyParseFailed()

        return [
            Data(
                site="小红书 xiaohongshu.com",
                title=title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]