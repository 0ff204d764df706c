from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.css_builder import CssDirBuilder


@pytest.fixture
def css_dir(tmp_path: Path) -> CssDirBuilder:
    """Provide a reusable stylesheet directory rooted at the pytest tmp_path."""
    return CssDirBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_cssloader_logger() -> Iterator[None]:
    """Undo handler changes made by configure_logging so caplog keeps working."""
    yield
    logger = logging.getLogger("cssloader")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
