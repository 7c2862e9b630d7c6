import pytest
import responses

from vidfetch import request
from vidfetch.extractors.types import DataType, ExtractorError, Options
from vidfetch.extractors.udn import UdnExtractor, get_cdn_url, prepare_embed_url

EMBED_URL = "https://video.udn.com/embed/news/300040"
CDN = "cdn.udn.com/api/video?id=300040"
SRC_URL = "https://v.udn.com/300040.mp4"

CDN_SNIPPET = (
    "src: 'https://example.com/x.m3u8',\n"
    f"            mp4: '//{CDN}'\n"
    "        },\n"
    "        subtitles: []"
)


@pytest.fixture(autouse=True)
def _reset_options():
    request.set_options(request.RequestOptions())
    yield
    request.set_options(request.RequestOptions())


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _page(title=None, with_cdn=True):
    title_part = f"title: '{title}',\n        link: 'x'," if title else ""
    return "<script>var options = {" + title_part + (CDN_SNIPPET if with_cdn else "") + "};</script>"


def test_prepare_embed_url_converts_news_url():
    assert prepare_embed_url("https://video.udn.com/news/300040") == EMBED_URL


def test_prepare_embed_url_keeps_embed_url():
    assert prepare_embed_url(EMBED_URL) == EMBED_URL


def test_get_cdn_url_found():
    assert get_cdn_url(CDN_SNIPPET) == CDN


def test_get_cdn_url_missing():
    assert get_cdn_url("no video here") == ""


def test_extract(mocked):
    title = '生物老師男變女 全校挺"做自己"'
    file_size = 12740874
    mocked.add(responses.GET, EMBED_URL, body=_page(title))
    mocked.add(responses.GET, "http://" + CDN, body=SRC_URL)
    mocked.add(
        responses.GET,
        SRC_URL,
        body=b"\0" * file_size,
        headers={"Content-Length": str(file_size)},
    )

    data = UdnExtractor().extract(EMBED_URL, Options())

    item = data[0]
    assert item.title == title
    assert item.site == "udn udn.com"
    assert item.type == DataType.VIDEO
    assert item.url == EMBED_URL
    stream = item.streams["normal"]
    assert stream.quality == "normal"
    assert stream.size == file_size
    assert stream.parts[0].url == SRC_URL
    assert stream.parts[0].ext == "mp4"


def test_extract_converts_url_and_defaults_title(mocked):
    mocked.add(responses.GET, EMBED_URL, body=_page(None))
    mocked.add(responses.GET, "http://" + CDN, body=SRC_URL)
    mocked.add(responses.GET, SRC_URL, body=b"\0" * 5, headers={"Content-Length": "5"})

    item = UdnExtractor().extract("https://video.udn.com/news/300040")[0]

    assert item.title == "udn"
    assert item.url == EMBED_URL
    assert item.streams["normal"].size == 5


def test_extract_without_cdn(mocked):
    mocked.add(responses.GET, EMBED_URL, body=_page("t", with_cdn=False))

    with pytest.raises(ExtractorError, match="empty list"):
        UdnExtractor().extract(EMBED_URL)