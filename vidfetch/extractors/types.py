"""Core data structures shared by all extractors."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional

# Parts in these containers are merged into an mp4 file.
_MERGE_TO_MP4 = frozenset({"ts", "flv", "f4v"})


class ExtractorError(Exception):
    """Base class for errors raised while extracting media data."""

    default_message = "extraction failed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class URLParseFailed(ExtractorError):
    """The URL or the page behind it could not be parsed."""

    default_message = "url parse failed"


class BodyParseFailed(ExtractorError):
    """The response body could not be parsed."""

    default_message = "body parse failed"


class URLQueryParamsParseFailed(ExtractorError):
    """The query parameters of the URL could not be parsed."""

    default_message = "url query params parse failed"


@dataclass
class Part:
    """A single downloadable piece of a stream."""

    url: str = ""
    size: int = 0
    ext: str = ""


@dataclass
class CaptionPart(Part):
    """A caption file, with an optional transform applied to its bytes."""

    transform: Optional[Callable[[bytes], bytes]] = None


@dataclass
class Stream:
    """One variant of the media, such as 720P or 1080P."""

    id: str = ""
    quality: str = ""
    parts: list[Part] = field(default_factory=list)
    size: int = 0
    ext: str = ""
    need_mux: bool = False


class DataType(str, enum.Enum):
    """The kind of media that was extracted."""

    VIDEO = "video"
    IMAGE = "image"
    AUDIO = "audio"


@dataclass
class Data:
    """Everything extracted from one URL."""

    url: str = ""
    site: str = ""
    title: str = ""
    type: DataType | str = ""
    streams: dict[str, Stream] = field(default_factory=dict)
    captions: dict[str, CaptionPart] = field(default_factory=dict)
    err: Optional[BaseException] = None

    def fill_up_streams_data(self) -> None:
        """Fill in stream ids, qualities, merged extensions and total sizes."""
        for stream_id, stream in self.streams.items():
            stream.id = stream_id
            if not stream.quality:
                stream.quality = stream_id

            if self.type == DataType.VIDEO and not stream.ext:
                ext = stream.parts[0].ext
                stream.ext = "mp4" if ext in _MERGE_TO_MP4 else ext

            if stream.size > 0:
                continue
            stream.size = sum(part.size for part in stream.parts)


def empty_data(url: str, err: Optional[BaseException]) -> Data:
    """Return a Data object that only records the URL and an error."""
    return Data(url=url, err=err)


@dataclass
class Options:
    """Optional settings passed to an extractor."""

    playlist: bool = False
    items: str = ""
    item_start: int = 0
    item_end: int = 0
    thread_number: int = 0
    cookie: str = ""
    episode_title_only: bool = False
    youku_ccode: str = ""
    youku_ckey: str = ""
    youku_password: str = ""


class Extractor(ABC):
    """Interface every site extractor implements."""

    @abstractmethod
    def extract(self, url: str, option: Options) -> list[Data]:
        """Extract media data from the given URL."""