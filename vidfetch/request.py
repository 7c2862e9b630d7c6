"""HTTP helpers with shared options, retries and cookie handling."""

from __future__ import annotations

import time
import warnings
from dataclasses import dataclass
from typing import Mapping, Optional

import requests
from requests.structures import CaseInsensitiveDict

FAKE_HEADERS: dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Charset": "UTF-8,*;q=0.5",
    "Accept-Language": "en-US,en;q=0.8",
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64; rv:98.0) Gecko/20100101 Firefox/98.0",
}

# Connect timeout and overall read timeout, in seconds.
_TIMEOUT = (10, 15 * 60)


class RequestError(Exception):
    """An HTTP request failed or returned an unusable response."""


@dataclass
class RequestOptions:
    """Options applied to every request."""

    retry_times: int = 0
    cookie: str = ""
    user_agent: str = ""
    refer: str = ""
    debug: bool = False
    silent: bool = False


_options = RequestOptions()


def set_options(opt: RequestOptions) -> None:
    """Set the options used by all later requests."""
    global _options
    _options = opt


def _parse_netscape_cookies(raw: str) -> list[tuple[str, str]]:
    cookies = []
    for line in raw.splitlines():
        line = line.strip()
        if line.startswith("#HttpOnly_"):
            line = line[len("#HttpOnly_"):]
        elif not line or line.startswith("#"):
            continue
        fields = line.split("\t")
        if len(fields) != 7:
            continue
        cookies.append((fields[5], fields[6]))
    return cookies


def _apply_cookie(req_headers: CaseInsensitiveDict, raw: str) -> None:
    cookies = _parse_netscape_cookies(raw)
    if not cookies:
        req_headers["Cookie"] = raw
        return
    pairs = "; ".join(f"{name}={value}" for name, value in cookies)
    existing = req_headers.get("Cookie")
    req_headers["Cookie"] = f"{existing}; {pairs}" if existing else pairs


def _print_debug(method: str, url: str, req_headers: Mapping[str, str], status: int) -> None:
    blue, red, green, reset = "\033[34m", "\033[31m", "\033[32m", "\033[0m"
    print()
    print(f"{blue}URL:         {reset}{url}")
    print(f"{blue}Method:      {reset}{method}")
    print(f"{blue}Headers:     {reset}{dict(req_headers)!r}")
    colour = red if status >= 400 else green
    print(f"{blue}Status Code: {reset}{colour}{status}{reset}")


def request(
    method: str,
    url: str,
    body: Optional[bytes] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> requests.Response:
    """Send a request, retrying on failure, and return the streamed response."""
    given = CaseInsensitiveDict(headers or {})
    req_headers = CaseInsensitiveDict(FAKE_HEADERS)
    req_headers.update(given)
    if "Referer" not in given:
        req_headers["Referer"] = url
    if _options.cookie:
        _apply_cookie(req_headers, _options.cookie)
    if _options.user_agent:
        req_headers["User-Agent"] = _options.user_agent
    if _options.refer:
        req_headers["Referer"] = _options.refer

    attempt = 0
    while True:
        attempt += 1
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                response = requests.request(
                    method,
                    url,
                    data=body,
                    headers=req_headers,
                    timeout=_TIMEOUT,
                    verify=False,
                    stream=True,
                )
        except requests.RequestException as exc:
            failure = f"request error: {exc}"
        else:
            if response.status_code < 400:
                break
            response.close()
            failure = f"{url} request error: HTTP {response.status_code}"
        if attempt >= _options.retry_times:
            raise RequestError(failure)
        time.sleep(1)

    if _options.debug:
        _print_debug(method, url, req_headers, response.status_code)
    return response


def get_bytes(
    url: str, refer: str = "", headers: Optional[Mapping[str, str]] = None
) -> bytes:
    """GET a URL and return the decoded body."""
    req_headers = dict(headers or {})
    if refer:
        req_headers["Referer"] = refer
    with request("GET", url, None, req_headers) as response:
        try:
            return response.content
        except requests.RequestException as exc:
            raise RequestError(f"read error: {exc}") from exc


def get(url: str, refer: str = "", headers: Optional[Mapping[str, str]] = None) -> str:
    """GET a URL and return the body as text."""
    return get_bytes(url, refer, headers).decode("utf-8", errors="replace")


def headers(url: str, refer: str = "") -> CaseInsensitiveDict:
    """Return the response headers of a GET request to the URL."""
    with request("GET", url, None, {"Referer": refer}) as response:
        return response.headers


def size(url: str, refer: str = "") -> int:
    """Return the Content-Length of the URL."""
    value = headers(url, refer).get("Content-Length", "")
    if not value:
        raise RequestError("Content-Length is not present")
    try:
        return int(value)
    except ValueError as exc:
        raise RequestError(f"invalid Content-Length: {value!r}") from exc


def content_type(url: str, refer: str = "") -> str:
    """Return the media type of the URL, without parameters."""
    return headers(url, refer).get("Content-Type", "").split(";")[0]