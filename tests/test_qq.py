import json
import re
from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from vidfetch import request
from vidfetch.extractors.qq import QQExtractor
from vidfetch.extractors.types import DataType, ExtractorError, Options, URLParseFailed

CDN = "http://cdn.example.com/"


@pytest.fixture
def mocked():
    request.set_options(request.RequestOptions())
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _qz(payload):
    return "QZOutputJson=" + json.dumps(payload) + ";"


def _info(title, formats, fn, clips, msg=""):
    return {
        "fl": {"fi": formats},
        "vl": {
            "vi": [
                {
                    "fn": fn,
                    "ti": title,
                    "fvkey": "FALLBACK",
                    "cl": {"fc": clips, "ci": []},
                    "ul": {"ui": [{"url": CDN}]},
                }
            ]
        },
        "msg": msg,
    }


def _serve(rsps, infos, key, sizes, pages=None):
    pages = pages or {}

    def handler(req):
        url = req.url
        query = parse_qs(urlsplit(url).query)
        if url.startswith("http://vv.video.qq.com/getinfo"):
            return 200, {}, _qz(infos[query["defn"][0]])
        if url.startswith("http://vv.video.qq.com/getkey"):
            return 200, {}, _qz({"key": key})
        if url in sizes:
            return 200, {"Content-Length": str(sizes[url])}, b""
        if url in pages:
            return 200, {}, pages[url]
        return 404, {}, b""

    rsps.add_callback(responses.GET, re.compile(r"https?://.*"), callback=handler)


def _best(data):
    return sorted(data.streams.values(), key=lambda s: s.size, reverse=True)[0]


def test_normal_video(mocked):
    title = "世界杯第一期：100秒速成！“伪球迷”世界杯生存指南"
    formats = [
        {"id": 10209, "name": "shd", "cname": "超清;(720P)", "fs": 1},
        {"id": 10219, "name": "fhd", "cname": "蓝光;(1080P)", "fs": 1},
    ]
    sizes = {
        f"{CDN}n0687peq62x.p209.1.mp4?vkey=KEY": 10000000,
        f"{CDN}n0687peq62x.p209.2.mp4?vkey=KEY": 2000000,
        f"{CDN}n0687peq62x.p219.1.mp4?vkey=KEY": 20000000,
        f"{CDN}n0687peq62x.p219.2.mp4?vkey=KEY": 3759683,
    }
    _serve(mocked, {"shd": _info(title, formats, "n0687peq62x.p209.mp4", 2)}, "KEY", sizes)

    data = QQExtractor().extract("https://v.qq.com/x/page/n0687peq62x.html", Options())[0]

    assert data.title == title
    assert data.type == DataType.VIDEO
    best = _best(data)
    assert best.quality == "蓝光;(1080P)"
    assert best.size == 23759683
    assert [part.url for part in data.streams["shd"].parts] == [
        f"{CDN}n0687peq62x.p209.1.mp4?vkey=KEY",
        f"{CDN}n0687peq62x.p209.2.mp4?vkey=KEY",
    ]
    assert data.streams["shd"].size == 12000000


def test_fmt_id_from_second_info_and_fallback_key(mocked):
    title = "《卡路里》出圈！妖娆男子教学广场舞版，大妈表情亮了！"
    formats = [{"id": 2, "name": "hd", "cname": "超清;(720P)", "fs": 1}]
    infos = {
        "shd": _info(title, formats, "e0765r4mwcr.mp4", 0),
        "hd": _info(title, formats, "e0765r4mwcr.p203.mp4", 0),
    }
    sizes = {f"{CDN}e0765r4mwcr.p203.1.mp4?vkey=FALLBACK": 14112979}
    _serve(mocked, infos, "", sizes)

    url = "https://v.qq.com/x/cover/2aya3ibdmft6vdw/e0765r4mwcr.html"
    data = QQExtractor().extract(url, Options())[0]

    assert data.title == title
    best = _best(data)
    assert best.quality == "超清;(720P)"
    assert best.size == 14112979
    assert data.url == url


def test_unnumbered_file_name(mocked):
    formats = [{"id": 2, "name": "sd", "cname": "标清", "fs": 1}]
    infos = {
        "shd": _info("t", formats, "e0765r4mwcr.mp4", 1),
        "sd": _info("t", formats, "e0765r4mwcr.mp4", 1),
    }
    sizes = {f"{CDN}e0765r4mwcr.mp4?vkey=KEY": 500}
    _serve(mocked, infos, "KEY", sizes)

    data = QQExtractor().extract("https://v.qq.com/x/page/e0765r4mwcr.html", Options())[0]
    assert data.streams["sd"].parts[0].url == f"{CDN}e0765r4mwcr.mp4?vkey=KEY"


def test_vid_looked_up_in_page(mocked):
    formats = [{"id": 10209, "name": "shd", "cname": "超清", "fs": 1}]
    page_url = "https://v.qq.com/x/cover/abc.html"
    sizes = {f"{CDN}n0687peq62x.p209.1.mp4?vkey=KEY": 42}
    _serve(
        mocked,
        {"shd": _info("page title", formats, "n0687peq62x.p209.mp4", 1)},
        "KEY",
        sizes,
        pages={page_url: '<script>var x = {vid: "n0687peq62x"};</script>'},
    )

    data = QQExtractor().extract(page_url, Options())[0]
    assert data.title == "page title"
    assert data.streams["shd"].size == 42


def test_api_message_is_error(mocked):
    _serve(mocked, {"shd": _info("t", [], "x.mp4", 1, msg="vid is wrong")}, "KEY", {})
    with pytest.raises(ExtractorError, match="vid is wrong"):
        QQExtractor().extract("https://v.qq.com/x/page/n0687peq62x.html", Options())


def test_url_without_vid():
    with pytest.raises(URLParseFailed):
        QQExtractor().extract("https://v.qq.com/", Options())