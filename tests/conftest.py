from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.java_builder import JavaTreeBuilder


@pytest.fixture
def java_tree(tmp_path: Path) -> JavaTreeBuilder:
    """Provide a reusable Java project builder rooted at the pytest tmp_path."""
    return JavaTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_dtsgen_logger() -> Iterator[None]:
    """Undo CLI logging configuration so caplog sees every record."""
    yield
    logger = logging.getLogger("dtsgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
