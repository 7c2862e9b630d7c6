import io

import pytest
import responses

from vidfetch import request
from vidfetch.utils import (
    domain,
    file_line_counter,
    file_name,
    file_path,
    file_size,
    get_name_and_ext,
    int_range,
    limit_length,
    m3u8_urls,
    match_all,
    match_one_of,
    md5,
    parse_input_file,
    reverse,
)


@pytest.fixture
def mocked():
    request.set_options(request.RequestOptions())
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _lines(count=10):
    return "".join(f"line{n}\n" for n in range(1, count + 1))


def test_match_one_of_second_pattern():
    assert match_one_of("hello12345", r"aaa(\d+)", r"hello(\d+)") == ["hello12345", "12345"]


def test_match_one_of_no_match():
    assert match_one_of("hello12345", r"aaa(\d+)", r"bbb(\d+)") is None


def test_match_one_of_unmatched_group_is_empty():
    assert match_one_of("ab", r"a(x)?(b)") == ["ab", "", "b"]


def test_match_all():
    assert match_all("hello12345hello123", r"hello(\d+)") == [
        ["hello12345", "12345"],
        ["hello123", "123"],
    ]


def test_file_size_missing(tmp_path):
    assert file_size(str(tmp_path / "hello")) == (0, False)


def test_file_size_existing(tmp_path):
    target = tmp_path / "data.bin"
    target.write_bytes(b"12345")
    assert file_size(str(target)) == (5, True)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("http://www.aa.com", "aa"),
        ("https://aa.com", "aa"),
        ("aa.cn", "aa"),
        ("www.aa.cn", "aa"),
        ("http://www.aa.com.cn", "aa"),
        ("http://aa", ""),
    ],
)
def test_domain(url, expected):
    assert domain(url) == expected


@pytest.mark.parametrize(
    "text, length, expected",
    [("你好 hello", 8, "你好 hello"), ("你好 hello", 6, "你好 ..."), ("abc", 0, "abc")],
)
def test_limit_length(text, length, expected):
    assert limit_length(text, length) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("hello/world", "hello world"),
        ("hello:world", "hello：world"),
        (
            "super 超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长",
            "super 超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级长超级...",
        ),
    ],
)
def test_file_name(name, expected):
    assert file_name(name, "", 80) == expected


def test_file_name_colon_space_and_ext():
    assert file_name("a: b|c", "mp4", 0) == "a：b-c.mp4"


@pytest.mark.parametrize(
    "name, ext, escape, expected",
    [("hello", "txt", False, "hello.txt"), ("hello:world", "txt", True, "hello：world.txt")],
)
def test_file_path(name, ext, escape, expected):
    assert file_path(name, ext, 80, "", escape) == expected


def test_file_path_with_directory(tmp_path):
    assert file_path("a", "mp4", 80, str(tmp_path), True) == str(tmp_path / "a.mp4")


def test_file_path_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        file_path("a", "mp4", 80, str(tmp_path / "missing"), True)


def test_get_name_and_ext_from_path():
    url = "https://img9.bcyimg.com/drawer/15294/post/1799t/1f5a87801a0711e898b12b640777720f.jpg"
    assert get_name_and_ext(url) == ("1f5a87801a0711e898b12b640777720f", "jpg")


def test_get_name_and_ext_from_content_type(mocked):
    url = "https://img9.bcyimg.com/drawer/15294/post/1799t/1f5a87801a0711e898b12b640777720f.jpg/w650"
    mocked.add(responses.GET, url, headers={"Content-Type": "image/jpeg"}, body=b"")
    assert get_name_and_ext(url) == ("w650", "jpeg")


def test_get_name_and_ext_invalid_uri():
    with pytest.raises(ValueError):
        get_name_and_ext("test")


def test_get_name_and_ext_request_fails(mocked):
    mocked.add(responses.GET, "https://a.com/a", status=404)
    with pytest.raises(request.RequestError):
        get_name_and_ext("https://a.com/a")


def test_md5():
    assert md5("123456") == "e10adc3949ba59abbe56e057f20f883e"


def test_reverse():
    assert reverse("123456") == "654321"


@pytest.mark.parametrize("start, end, expected", [(1, 3, [1, 2, 3]), (2, 2, [2])])
def test_int_range(start, end, expected):
    assert int_range(start, end) == expected


def test_file_line_counter_text():
    assert file_line_counter(io.StringIO(_lines())) == 10


def test_file_line_counter_binary():
    assert file_line_counter(io.BytesIO(b"a\nb\nc")) == 2


def test_file_line_counter_empty():
    assert file_line_counter(io.BytesIO(b"")) == 0


@pytest.mark.parametrize(
    "start, end, items, expected",
    [(2, 4, "", 3), (0, 4, "", 4), (2, 1, "", 1), (0, 0, "1-2, 5, 6, 8", 5)],
)
def test_parse_input_file_counts(start, end, items, expected):
    assert len(parse_input_file(io.StringIO(_lines()), items, start, end)) == expected


def test_parse_input_file_items_content():
    got = parse_input_file(io.StringIO(_lines()), "1-2, 5, 6, 8", 0, 0)
    assert got == ["line1", "line2", "line5", "line6", "line8"]


def test_parse_input_file_start_from_x():
    start = 5
    lines_count = file_line_counter(io.StringIO(_lines()))
    got = parse_input_file(io.StringIO(_lines()), "", start, 0)
    assert len(got) == lines_count - start + 1


def test_parse_input_file_empty():
    assert parse_input_file(io.StringIO(""), "", 0, 0) == []


def test_parse_input_file_strips_binary():
    assert parse_input_file(io.BytesIO(b"  a  \r\nb\n"), "", 0, 0) == ["a", "b"]


def test_m3u8_urls(mocked):
    playlist = "#EXTM3U\n#EXTINF:10,\nseg1.ts\n\nhttp://other.example.com/seg2.ts\n"
    mocked.add(responses.GET, "http://media.example.com/live/index.m3u8", body=playlist)
    assert m3u8_urls("http://media.example.com/live/index.m3u8") == [
        "http://media.example.com/live/seg1.ts",
        "http://other.example.com/seg2.ts",
    ]


def test_m3u8_urls_empty_uri():
    with pytest.raises(ValueError):
        m3u8_urls("")