import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Activate the test overlay of each domain.toml and the test settings
    before any domain or application module is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["ENVIRONMENT"] = session.config.option.env
    os.environ.pop("LOG_DIR", None)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def catalogue_bed():
    from catalogue.domain import catalogue
    from protean.integrations.pytest import DomainFixture

    bed = DomainFixture(catalogue)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering
    from protean.integrations.pytest import DomainFixture

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture()
def client(catalogue_bed, ordering_bed):
    from app import create_app
    from fastapi.testclient import TestClient

    return TestClient(create_app())
