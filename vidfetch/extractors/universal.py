"""Extractor for plain file URLs on any site."""

from __future__ import annotations

from typing import Optional

from .. import request
from ..utils import get_name_and_ext
from .types import Data, DataType, Extractor, Options, Part, Stream


def _data_type(content_type: str) -> DataType | str:
    try:
        return DataType(content_type)
    except ValueError:
        return content_type


class UniversalExtractor(Extractor):
    """Treats the URL itself as the single file to download."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        filename, ext = get_name_and_ext(url)
        file_size = request.size(url, url)
        streams = {
            "default": Stream(parts=[Part(url=url, size=file_size, ext=ext)], size=file_size)
        }
        ctype = request.content_type(url, url)
        return [
            Data(
                site="Universal",
                title=filename,
                type=_data_type(ctype),
                streams=streams,
                url=url,
            )
        ]