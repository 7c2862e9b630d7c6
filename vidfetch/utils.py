"""General helpers: pattern matching, file names, playlists and URL handling."""

from __future__ import annotations

import hashlib
import os
import re
import sys
from typing import IO, Callable, Optional, Union
from urllib.parse import unquote, urljoin, urlsplit

from . import request
from .playlist import need_download_list

_CHUNK_SIZE = 32 * 1024
_ELLIPSES = "..."

_DOMAIN_PATTERN = (
    r"([a-z0-9][-a-z0-9]{0,62})\."
    r"(com\.cn|com\.hk|"
    r"cn|com|net|edu|gov|biz|org|info|pro|name|xxx|xyz|be|"
    r"me|top|cc|tv|tt|vn)"
)


def _replacer(mapping: dict[str, str]) -> Callable[[str], str]:
    # One pass, earlier keys win at the same position.
    pattern = re.compile("|".join(re.escape(key) for key in mapping))
    return lambda text: pattern.sub(lambda m: mapping[m.group(0)], text)


_replace_common = _replacer(
    {"\n": " ", "/": " ", "|": "-", ": ": "：", ":": "：", "'": "’"}
)
_replace_windows = _replacer(
    {'"': " ", "?": " ", "*": " ", "\\": " ", "<": " ", ">": " "}
)


def match_one_of(text: str, *args: str) -> Optional[list[str]]:
    """Return the groups of the first pattern in args that matches text.

    The list starts with the whole match; groups that did not take part are
    empty strings. Returns None when no pattern matches.
    """
    for pattern in args:
        match = re.search(pattern, text, re.ASCII)
        if match:
            return [match.group(0), *(group or "" for group in match.groups())]
    return None


def match_all(text: str, pattern: str) -> list[list[str]]:
    """Return the groups of every non-overlapping match of pattern in text."""
    return [
        [match.group(0), *(group or "" for group in match.groups())]
        for match in re.finditer(pattern, text, re.ASCII)
    ]


def file_size(file_path: str) -> tuple[int, bool]:
    """Return the size of a file and whether it exists."""
    try:
        return os.stat(file_path).st_size, True
    except FileNotFoundError:
        return 0, False


def domain(url: str) -> str:
    """Return the second-level domain name of a URL, or an empty string."""
    match = match_one_of(url, _DOMAIN_PATTERN)
    return match[1] if match else ""


def limit_length(s: str, length: int) -> str:
    """Shorten s to length characters, ending with an ellipsis; 0 means no limit."""
    if length == 0 or len(s) <= length:
        return s
    return s[: length - len(_ELLIPSES)] + _ELLIPSES


def file_name(name: str, ext: str, length: int) -> str:
    """Turn a string into a valid file name with an optional extension."""
    name = _replace_common(name)
    if sys.platform == "win32":
        name = _replace_windows(name)
    limited = limit_length(name, length)
    return f"{limited}.{ext}" if ext else limited


def file_path(name: str, ext: str, length: int, output_path: str, escape: bool) -> str:
    """Build the output path of a file; the output directory must exist."""
    if output_path:
        os.stat(output_path)
    name_part = file_name(name, ext, length) if escape else f"{name}.{ext}"
    return os.path.join(output_path, name_part)


def file_line_counter(r: IO) -> int:
    """Count the newline characters readable from a text or binary stream."""
    count = 0
    while True:
        chunk = r.read(_CHUNK_SIZE)
        if not chunk:
            return count
        count += chunk.count(b"\n" if isinstance(chunk, bytes) else "\n")


def parse_input_file(r: IO, items: str, item_start: int, item_end: int) -> list[str]:
    """Return the stripped lines of a stream that the item selection asks for."""
    lines = [
        (line.decode("utf-8", errors="replace") if isinstance(line, bytes) else line).strip()
        for line in r
    ]
    wanted = set(need_download_list(items, item_start, item_end, len(lines)))
    return [line for index, line in enumerate(lines, 1) if index in wanted]


def _parse_request_uri(uri: str):
    parts = urlsplit(uri)
    if not parts.scheme and not uri.startswith("/"):
        raise ValueError(f"parse {uri!r}: invalid URI for request")
    return parts


def get_name_and_ext(uri: str) -> tuple[str, str]:
    """Return the file name and extension of a URL.

    When the last path segment has no extension it is taken from the
    Content-Type of the URL.
    """
    parts = _parse_request_uri(uri)
    pieces = unquote(parts.path).split("/")[-1].split(".")
    if len(pieces) > 1:
        return pieces[0], pieces[1]
    ctype = request.content_type(uri, uri)
    if "/" not in ctype:
        raise ValueError(f"unexpected Content-Type {ctype!r} for {uri}")
    return pieces[0], ctype.split("/")[1]


def md5(text: str) -> str:
    """Return the hex MD5 digest of text."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def m3u8_urls(uri: str) -> list[str]:
    """Return the absolute URLs listed in an m3u8 playlist."""
    if not uri:
        raise ValueError("url is null")
    playlist = request.get(uri, "", None)
    urls = []
    for line in playlist.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        urls.append(line if line.startswith("http") else urljoin(uri, line))
    return urls


def reverse(s: str) -> str:
    """Return s with its characters in reverse order."""
    return s[::-1]


def int_range(start: int, end: int) -> list[int]:
    """Return the integers from start to end, both included."""
    return list(range(start, end + 1))


__all__ = [
    "match_one_of",
    "match_all",
    "file_size",
    "domain",
    "limit_length",
    "file_name",
    "file_path",
    "file_line_counter",
    "parse_input_file",
    "get_name_and_ext",
    "md5",
    "m3u8_urls",
    "reverse",
    "int_range",
]

StrOrBytes = Union[str, bytes]