"""Fixtures for unit tests."""

from pathlib import Path
from typing import Callable, Generator

import pytest
import structlog

FIXTURES_DIRECTORY = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def fixture_bundle_root() -> Path:
    """Path to the sample bundle shipped with the tests."""
    return FIXTURES_DIRECTORY / "bundle"


@pytest.fixture
def feature_request_path(fixture_bundle_root: Path) -> Path:
    """Path to the sample feature request issue form."""
    return fixture_bundle_root / "ISSUE_TEMPLATE" / "feature_request.yml"


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a file below tmp_path, creating parent directories, and return its path."""

    def _write(relative_path: str, content: str) -> Path:
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
