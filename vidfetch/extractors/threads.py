"""Extractor for threads.net posts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

import requests
from bs4 import BeautifulSoup

from .. import request
from ..utils import get_name_and_ext
from .types import Data, DataType, Extractor, ExtractorError, Options, Part, Stream

_TIMEOUT = (5, 10)
_CONTAINERS = ("div.SingleInnerMediaContainer", "div.MediaScrollImageContainer")


@dataclass
class _Media:
    url: str
    type: DataType


def _embed_url(url: str) -> str:
    parts = urlsplit(url)
    path = parts.path.rstrip("/") + "/embed"
    return urlunsplit(parts._replace(path=path, fragment=""))


def _collect_media(html: str) -> list[_Media]:
    doc = BeautifulSoup(html, "html.parser")
    medias: list[_Media] = []
    for selector in _CONTAINERS:
        for container in doc.select(selector):
            img = container.select_one("img")
            if img is not None and img.get("src"):
                medias.append(_Media(img["src"], DataType.IMAGE))
            source = container.select_one("video > source")
            if source is not None and source.get("src"):
                medias.append(_Media(source["src"], DataType.VIDEO))
    return medias


class ThreadsExtractor(Extractor):
    """Extracts the images and videos of a threads.net post."""

    def __init__(self) -> None:
        self._session = requests.Session()

    def _fetch_embed(self, url: str) -> str:
        try:
            response = self._session.get(_embed_url(url), timeout=_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ExtractorError(f"failed to send HTTP request to the Threads: {exc}") from exc
        return response.text

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        try:
            path = urlsplit(url).path
        except ValueError as exc:
            raise ExtractorError(f"invalid URL: {exc}") from exc
        segments = path.split("/")
        if len(segments) < 4:
            raise ExtractorError("invalid URL format")
        poster, short_code = segments[1], segments[3]
        title = f"Threads {poster} - {short_code}"

        medias = _collect_media(self._fetch_embed(url))

        parts = []
        for media in medias:
            _, ext = get_name_and_ext(media.url)
            parts.append(Part(url=media.url, size=request.size(media.url, url), ext=ext))

        streams = {"default": Stream(parts=parts, size=sum(part.size for part in parts))}
        return [
            Data(
                site="Threads www.threads.net",
                title=title,
                type=DataType.IMAGE,
                streams=streams,
                url=url,
            )
        ]