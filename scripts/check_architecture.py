#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/magick_exec"

# Modules that must stay free of process spawning and CLI frameworks.
PURE_MODULES = ("arguments.py", "escaping.py", "commandline.py", "geometry.py", "identify.py")


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    _assert_no_imports(
        PACKAGE / "cli/cli.py",
        ["import subprocess", "from subprocess"],
    )

    for path in (PACKAGE / "application").glob("*.py"):
        _assert_no_imports(
            path,
            [
                "import typer",
                "from typer",
                "import subprocess",
                "from subprocess",
            ],
        )

    for name in PURE_MODULES:
        _assert_no_imports(
            PACKAGE / name,
            [
                "import subprocess",
                "from subprocess",
                "import typer",
                "from magick_exec.exec_manager",
            ],
        )

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
