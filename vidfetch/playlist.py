"""Selection of playlist items to download."""

from __future__ import annotations


def _to_int(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def need_download_list(items: str, item_start: int, item_end: int, length: int) -> list[int]:
    """Return the 1-based playlist indices that should be downloaded.

    ``items`` is a comma separated list such as ``1,5,6,8-10``; when it is
    empty the range ``item_start``..``item_end`` is used instead.
    """
    if items:
        selected: list[int] = []
        for chunk in items.split(","):
            bounds = chunk.split("-")
            start = _to_int(bounds[0])
            end = _to_int(bounds[1]) if len(bounds) >= 2 else start
            selected.extend(range(start, end + 1))
        return selected

    item_start = max(item_start, 1)
    if item_end == 0:
        item_end = length
    item_end = max(item_end, item_start)
    return list(range(item_start, item_end + 1))