import pytest

from remodeler import TransformRegistry


@pytest.fixture
def meetup():
    return {
        "UID": "12345@example.com",
        "name": "Supercool Meetup",
        "location": "Palo Alto CA",
        "when": "2014-06-01T18:00:00Z",
    }


@pytest.fixture
def registry():
    return TransformRegistry()
