import os
from pathlib import Path

import pytest


def pytest_sessionstart(session):  # noqa: ARG001
    """Run the service in its test configuration unless told otherwise.

    protean leaves logging to the service's own structlog setup.
    """
    os.environ.setdefault("ORDERS_ENV", "test")
    os.environ.setdefault("PROTEAN_NO_AUTO_LOGGING", "1")


def pytest_collection_modifyitems(config, items):  # noqa: ARG001
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
