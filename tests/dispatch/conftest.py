import pytest
from support.fakes import Fruit, RecordingHandler


@pytest.fixture()
def apple_handler(succeeding_source):
    return RecordingHandler(Fruit.APPLE, succeeding_source)


@pytest.fixture()
def pear_handler(succeeding_source):
    return RecordingHandler(Fruit.PEAR, succeeding_source)
