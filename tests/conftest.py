import pytest

from audit.enricher import ActivityLogEnricher
from tests.fakes import DictLookup, Record, make_registry


class Entry:
    """Stand-in for a log entry: anything with a ``properties`` attribute"""

    def __init__(self, properties=None):
        self.properties = properties


@pytest.fixture
def contacts():
    return DictLookup({
        1: Record(1, name='Acme'),
        2: Record(2, name='Globex'),
        3: Record(3, name='Initech'),
    }, deleted={3})


@pytest.fixture
def materials():
    return DictLookup({
        1: Record(1, name='Steel'),
        2: Record(2, name='Wood'),
    })


@pytest.fixture
def registry(contacts, materials):
    return make_registry(contact=contacts, material=materials)


@pytest.fixture
def enricher(registry):
    return ActivityLogEnricher(registry=registry)


@pytest.fixture
def make_entry():
    return Entry
