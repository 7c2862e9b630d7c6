"""Extractor for ximalaya.com audio tracks."""

from __future__ import annotations

import json
from typing import Optional

from .. import parser, request
from ..utils import get_name_and_ext, match_one_of
from .types import Data, DataType, Extractor, ExtractorError, Options, Part, Stream, URLParseFailed

_AUDIO_API = "https://www.ximalaya.com/revision/play/v1/audio?id={}&ptype=1"


def _audio_src(payload: str) -> str:
    try:
        info = json.loads(payload)
    except ValueError as exc:
        raise ExtractorError(f"invalid audio response: {exc}") from exc
    data = info.get("data") if isinstance(info, dict) else None
    src = data.get("src", "") if isinstance(data, dict) else ""
    return src if isinstance(src, str) else ""


class XimalayaExtractor(Extractor):
    """Extracts audio tracks from ximalaya.com."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url, url, None)
        title = parser.title(parser.get_doc(html))

        item_ids = match_one_of(url, r"/sound/(\d+)")
        if not item_ids:
            raise ExtractorError("unable to get audio ID")
        if len(item_ids) < 2:
            raise URLParseFailed()
        item_id = item_ids[-1]

        real_url = _audio_src(request.get(_AUDIO_API.format(item_id), url, None))
        total_size = request.size(real_url, url)
        _, ext = get_name_and_ext(real_url)

        streams = {
            "default": Stream(
                parts=[Part(url=real_url, size=total_size, ext=ext)], size=total_size
            )
        }
        return [
            Data(
                site="喜马拉雅 ximalaya.com",
                title=title,
                type=DataType.AUDIO,
                streams=streams,
                url=url,
            )
        ]