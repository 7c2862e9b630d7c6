import pytest
import responses

from vidfetch import request
from vidfetch.extractors.tangdou import TangdouExtractor
from vidfetch.extractors.types import DataType, Options, URLParseFailed

PAGE_URL = "https://m.tangdou.com/play/1500676338077"
TITLE = "暴瘦减肚子，不用跑不用跳，8天瘦了16斤 正面演示 背面演示 分解教学__广场舞_糖豆广场舞-糖豆视频"


@pytest.fixture
def mocked():
    request.set_options(request.RequestOptions())
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_title_from_head_and_escaped_url(mocked):
    html = (
        f"<html><head><title>{TITLE}</title></head><body><script>"
        r'var c = {play_url: "https:\u002F\u002Fvideo.example.com\u002Fv.mp4",};'
        "</script></body></html>"
    )
    mocked.add(responses.GET, PAGE_URL, body=html)
    mocked.add(
        responses.GET,
        "https://video.example.com/v.mp4",
        headers={"Content-Length": "62258444"},
        body=b"",
    )

    data = TangdouExtractor().extract(PAGE_URL, Options())[0]

    assert data.err is None
    assert data.title == TITLE
    assert data.type == DataType.VIDEO
    stream = data.streams["default"]
    assert stream.size == 62258444
    assert stream.parts[0].url == "https://video.example.com/v.mp4"
    assert stream.parts[0].ext == "mp4"


def test_div_title_preferred(mocked):
    html = (
        '<div class="title">Dance</div><title>Other</title>'
        "<script>video:'https://video.example.com/d.mp4'</script>"
    )
    mocked.add(responses.GET, PAGE_URL, body=html)
    mocked.add(
        responses.GET, "https://video.example.com/d.mp4", headers={"Content-Length": "7"}, body=b""
    )

    data = TangdouExtractor().extract(PAGE_URL, Options())[0]
    assert data.title == "Dance"
    assert data.streams["default"].size == 7


def test_missing_title_is_recorded(mocked):
    mocked.add(responses.GET, PAGE_URL, body="<html><body>nothing</body></html>")
    data = TangdouExtractor().extract(PAGE_URL, Options())[0]
    assert isinstance(data.err, URLParseFailed)
    assert data.url == PAGE_URL
    assert data.streams == {}


def test_missing_video_is_recorded(mocked):
    mocked.add(responses.GET, PAGE_URL, body="<title>Only title</title>")
    data = TangdouExtractor().extract(PAGE_URL, Options())[0]
    assert isinstance(data.err, URLParseFailed)
    assert data.url == PAGE_URL
    assert data.title == ""
    assert data.streams == {}


def test_http_error_is_recorded(mocked):
    mocked.add(responses.GET, PAGE_URL, status=500)
    data = TangdouExtractor().extract(PAGE_URL, Options())[0]
    assert isinstance(data.err, request.RequestError)
    assert data.url == PAGE_URL