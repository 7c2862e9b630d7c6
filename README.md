# vidfetch

vidfetch finds the real media behind a page URL. Give an extractor a page
address and it returns the title, the kind of media (video, audio or image)
and every stream it could find, each made of one or more downloadable parts
with their size and file extension.

## Installing

```
pip install .
pip install ".[test]"   # with pytest and responses for the test suite
```

## Supported sites

Each site has its own extractor class in `vidfetch.extractors`:

| Module | Class |
| --- | --- |
| `qq` | `QQExtractor` |
| `reddit` | `RedditExtractor` |
| `rumble` | `RumbleExtractor` |
| `tangdou` | `TangdouExtractor` |
| `threads` | `ThreadsExtractor` |
| `tiktok` | `TikTokExtractor` |
| `tumblr` | `TumblrExtractor` |
| `udn` | `UdnExtractor` |
| `vimeo` | `VimeoExtractor` |
| `vk` | `VKExtractor` |
| `xiaohongshu` | `XiaohongshuExtractor` |
| `ximalaya` | `XimalayaExtractor` |
| `xinpianchang` | `XinpianchangExtractor` |
| `xvideos` | `XvideosExtractor` |
| `yinyuetai` | `YinyuetaiExtractor` |
| `youku` | `YoukuExtractor` |
| `zhihu` | `ZhihuExtractor` |
| `universal` | `UniversalExtractor` (any direct file URL) |

Every class implements `Extractor.extract(url, option)` and returns a list
of `Data` objects.

## Extracting a page

```python
from vidfetch.extractors.types import Options
from vidfetch.extractors.vimeo import VimeoExtractor

results = VimeoExtractor().extract("https://vimeo.com/254865724", Options())
data = results[0]
data.fill_up_streams_data()

print(data.site, data.title, data.type)
for stream_id, stream in data.streams.items():
    print(stream_id, stream.quality, stream.size, stream.ext)
    for part in stream.parts:
        print("   ", part.url, part.size, part.ext)
```

The types live in `vidfetch.extractors.types`: `Data` (url, site, title,
type, streams, captions, err), `Stream` (id, quality, parts, size, ext,
need_mux), `Part` (url, size, ext), `CaptionPart` and the `DataType` enum
(`VIDEO`, `IMAGE`, `AUDIO`).

`fill_up_streams_data()` fills in each stream's id, uses the id as quality
where none is known, works out the extension of the merged video file
(`ts`, `flv` and `f4v` parts become `mp4`) and sums the part sizes where no
total size is set.

`Options` carries the settings some extractors read; `YoukuExtractor` uses
`cookie`, `youku_ccode`, `youku_ckey` and `youku_password`.

An extractor raises an exception when a page cannot be understood:
`URLParseFailed`, `BodyParseFailed` and `URLQueryParamsParseFailed`, all
subclasses of `ExtractorError`. `TangdouExtractor` is the exception to this:
it returns a `Data` whose `err` holds the failure, built with `empty_data`.
Network failures raise `RequestError` from `vidfetch.request`.

## Request settings

All HTTP traffic goes through `vidfetch.request`. Retries, a cookie (either a
plain `a=b; c=d` string or the text of a Netscape cookie file), a custom user
agent, a fixed referer and debug output are configured once:

```python
from vidfetch.request import RequestOptions, set_options

set_options(RequestOptions(retry_times=3, cookie="placeholder"))
```

A request is tried up to `retry_times` times, one second apart, and fails on
a connection error or an HTTP status of 400 or above. With `debug=True` each
request's URL, method, headers and status are printed.

The helpers `request`, `get`, `get_bytes`, `headers`, `size` and
`content_type` send a request and return the response, the page's text or
bytes, its response headers, its `Content-Length` and its media type.

## Helpers

- `vidfetch.playlist.need_download_list(items, item_start, item_end, length)`
  turns a selection such as `"1-3, 5, 7-8"` or a start/end range into the
  1-based playlist positions to fetch.
- `vidfetch.utils` holds the pattern matchers (`match_one_of`, `match_all`),
  `domain`, the filename helpers (`file_name`, `file_path`, `limit_length`),
  `file_size`, `file_line_counter`, `get_name_and_ext`, `m3u8_urls` for
  expanding HLS playlists, `parse_input_file` for reading a list of URLs,
  `md5`, `reverse` and `int_range`.
- `vidfetch.parser` wraps HTML parsing: `get_doc`, `title` and `get_images`.
- `vidfetch.pool.WaitGroupPool` counts running worker threads and blocks
  `add()` while the given number are running; `wait()` blocks until all are
  `done()`.
- `vidfetch.ffmpeg` merges downloaded parts with an `ffmpeg` binary found in
  the current directory or on `PATH`: `merge_to_mp4` concatenates segments
  through a `<filename>.txt` list file, `merge_files_with_same_extension`
  muxes separate video and audio tracks. After a successful merge the part
  files and the list file are removed. A failed merge raises `MergeError`.

## What it does not do

vidfetch is a library only. It has no command-line program, and it does not
download the parts it finds: fetching the part URLs and calling the
`vidfetch.ffmpeg` helpers is left to the caller. There is also no lookup
from a URL to the right extractor; pick the extractor class for the site
yourself (`vidfetch.utils.domain` gives a URL's site name).