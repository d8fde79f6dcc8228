"""Suite markers for magick-exec tests.

Each test directory maps to one marker so suites can be selected with
``-m unit``, ``-m integration`` or ``-m e2e``.
"""

from __future__ import annotations

import pytest

SUITE_MARKERS: dict[str, pytest.MarkDecorator] = {
    "unit_tests": pytest.mark.unit,
    "integration_tests": pytest.mark.integration,
    "e2e_tests": pytest.mark.e2e,
}


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    del config
    for item in items:
        for directory in item.path.parts:
            marker = SUITE_MARKERS.get(directory)
            if marker is not None:
                item.add_marker(marker)
                break
