"""Pytest configuration and shared fixtures."""

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from recordflow.ingestion.resources import MappingResourceLoader, PackageResourceLoader
from recordflow.processing.facade import DataProcessor

SAMPLE_RESOURCES = (
    "data.csv",
    "data.json",
    "data.xml",
    "data-schema.json",
    "data-schema.xsd",
)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def test_data_dir(project_root: Path) -> Path:
    """Return the test data directory."""
    return project_root / "tests" / "data"


@pytest.fixture
def sample_documents() -> dict[str, str]:
    """Bundled sample datasets and schema documents by resource name."""
    loader = PackageResourceLoader()
    return {name: loader.load(name) for name in SAMPLE_RESOURCES}


@pytest.fixture
def memory_loader(sample_documents: dict[str, str]) -> MappingResourceLoader:
    """In-memory loader serving the sample documents."""
    return MappingResourceLoader(sample_documents)


@pytest.fixture
def processor() -> DataProcessor:
    """Processor reading the bundled sample resources."""
    return DataProcessor()


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo logging configuration made by CLI invocations."""
    yield
    structlog.reset_defaults()
