"""End-to-end smoke test for CLI help output."""

from __future__ import annotations

import subprocess

import magick_exec


def test_package_import_smoke() -> None:
    """Ensure package can be imported in the test process."""
    assert magick_exec.__version__


def test_cli_help_smoke() -> None:
    """Ensure the installed CLI entrypoint responds to --help."""
    result = subprocess.run(
        ["magick-exec", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "ImageMagick" in result.stdout


def test_cli_rotate_size_smoke() -> None:
    """Ensure the installed CLI computes a rotated size."""
    result = subprocess.run(
        ["magick-exec", "rotate-size", "--", "40", "20", "-10"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "43x27"


def test_cli_identify_missing_file_fails_cleanly() -> None:
    """Ensure CLI returns a user-facing validation error for a missing image."""
    result = subprocess.run(
        ["magick-exec", "identify", "/tmp/definitely-missing-image.png"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode != 0
    assert "does not exist" in result.stderr.lower()
