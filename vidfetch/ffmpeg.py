"""Merging downloaded parts with ffmpeg."""

from __future__ import annotations

import contextlib
import os
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence


class MergeError(Exception):
    """ffmpeg could not merge the parts."""


def find_ffmpeg_executable() -> str:
    """Return ffmpeg from the current directory if present, else the bare name."""
    name = "ffmpeg.exe" if sys.platform == "win32" else "ffmpeg"
    if Path(name).exists():
        return f"./{name}"
    return name


def _run_merge_cmd(
    cmd: Sequence[str], paths: Sequence[str], merge_file_path: Optional[str] = None
) -> None:
    try:
        result = subprocess.run(
            list(cmd), stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, check=False
        )
    except OSError as exc:
        raise MergeError(f"{exc}\n") from exc
    if result.returncode != 0:
        stderr = (result.stderr or b"").decode("utf-8", errors="replace")
        raise MergeError(f"exit status {result.returncode}\n{stderr}")

    leftovers = [merge_file_path] if merge_file_path else []
    for path in [*leftovers, *paths]:
        with contextlib.suppress(OSError):
            os.remove(path)


def merge_files_with_same_extension(paths: Sequence[str], merged_file_path: str) -> None:
    """Merge files of one extension, or an audio and a video track, into one file."""
    cmd = [find_ffmpeg_executable(), "-y"]
    for path in paths:
        cmd += ["-i", path]
    cmd += ["-c:v", "copy", "-c:a", "copy", merged_file_path]
    _run_merge_cmd(cmd, paths)


def merge_to_mp4(paths: Sequence[str], merged_file_path: str, filename: str) -> None:
    """Concatenate video parts into an MP4 file."""
    merge_file_path = filename + ".txt"
    with open(merge_file_path, "w", encoding="utf-8") as merge_file:
        merge_file.writelines(f"file '{path}'\n" for path in paths)

    cmd = [
        find_ffmpeg_executable(), "-y", "-f", "concat", "-safe", "0",
        "-i", merge_file_path, "-c", "copy", "-bsf:a", "aac_adtstoasc", merged_file_path,
    ]
    _run_merge_cmd(cmd, paths, merge_file_path)