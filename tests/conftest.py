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

    Selects the config environment and keeps provider selection on the
    in-memory fakes, whatever the developer's shell exports.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["ENGAGEMENT_PROVIDER"] = "fake"


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to reset provider registries after every test"""
    yield

    from engagement.analytics import reset_analytics_provider
    from engagement.commerce import reset_commerce_query
    from engagement.notification import reset_notification_provider

    reset_notification_provider()
    reset_analytics_provider()
    reset_commerce_query()
