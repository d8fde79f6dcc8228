"""Fixtures installing fake ImageMagick/GraphicsMagick binaries."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

if os.name == "nt":
    collect_ignore_glob = ["*.py", "cli/*.py"]

FAKE_CONVERT = """#!/bin/sh
if [ "$1" = "-version" ]; then
    echo "Version: ImageMagick 7.1.1-fake Q16"
    exit 0
fi
for last; do :; done
case "${last##*/}" in
    *fail*) echo "convert: no decode delegate for this image format" >&2; exit 1 ;;
    *silent*) exit 1 ;;
esac
printf '%s\\n' "$@" > "${last#*:}"
"""

FAKE_IDENTIFY = """#!/bin/sh
printf 'format:GIF|width:40|height:20|exif_orientation:\\n'
printf 'format:GIF|width:40|height:20|exif_orientation:\\n'
"""

FAKE_GM = """#!/bin/sh
if [ "$1" != "convert" ]; then
    echo "gm: unknown command $1" >&2
    exit 1
fi
shift
if [ "$1" = "-version" ]; then
    echo "GraphicsMagick 1.3.40-fake"
    exit 0
fi
for last; do :; done
printf '%s\\n' "$@" > "$last"
"""


def _install(directory: Path, name: str, body: str) -> Path:
    path = directory / name
    path.write_text(body, encoding="utf-8")
    path.chmod(0o755)
    return path


@pytest.fixture
def fake_binaries(tmp_path: Path) -> Path:
    """Directory holding executable convert/identify/gm stand-in scripts."""
    directory = tmp_path / "bin dir"
    directory.mkdir()
    _install(directory, "convert", FAKE_CONVERT)
    _install(directory, "identify", FAKE_IDENTIFY)
    _install(directory, "gm", FAKE_GM)
    return directory
