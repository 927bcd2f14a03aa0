"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local covtree package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers bound to streams of finished tests (CliRunner swaps stdio)."""
    from covtree.core.logging import _set_log_file_path

    yield
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    _set_log_file_path(None)


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Directory relative SF paths resolve against."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def sample_lcov() -> str:
    """Two files in lib/, one in lib/sub/, with a mix of hit and missed lines."""
    return (
        "TN:\n"
        "SF:lib/a.x\n"
        "DA:1,1\n"
        "DA:2,0\n"
        "LF:2\n"
        "LH:1\n"
        "end_of_record\n"
        "\n"
        "SF:lib/b.x\n"
        "DA:1,3\n"
        "DA:2,3\n"
        "DA:3,0\n"
        "DA:4,1\n"
        "end_of_record\n"
        "SF:lib/sub/c.x\n"
        "FN:1,main\n"
        "DA:1,0\n"
        "DA:2,0\n"
        "end_of_record\n"
    )
