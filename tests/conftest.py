import os
from pathlib import Path

import pytest

from dispatch.random_source import ScriptedRandomSource

# Keep test runs quiet unless LOG_LEVEL says otherwise.
os.environ.setdefault("DISPATCH_ENVIRONMENT", "test")

# Draws at or above every configured threshold: no simulated failure,
# no crypto congestion, top gas tier.
NEVER_FAIL = 0.99
# Draw below every configured threshold: simulated failure is forced.
ALWAYS_FAIL = 0.0


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture()
def succeeding_source():
    return ScriptedRandomSource([NEVER_FAIL])


@pytest.fixture()
def failing_source():
    return ScriptedRandomSource([ALWAYS_FAIL])


@pytest.fixture(autouse=True)
def reset_services():
    """Drop any service a test installed so the next test starts from defaults."""
    yield

    from notifications.channel import reset_notification_service
    from payments.methods import reset_payment_service

    reset_payment_service()
    reset_notification_service()
