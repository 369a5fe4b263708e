"""
Tests for the event handler and RemodelOrchestrator.
"""
import logging

from remodeler.handler import configure_logging, remodel_handler
from remodeler.orchestration import RemodelOrchestrator

CONFIG = {
    "copy_keys": ["UID", "name", "location", "when"],
    "exclude_keys": ["when"],
    "transformations": {
        "DTSTART": {"operation": "add_affix", "source": "when", "prefix": "DTSTART;VALUE=DATE_TIME:"},
        "DESCRIPTION": {"operation": "template", "template": "{name}@{location}"},
    },
}


def test_single_record(meetup):
    result = remodel_handler({"execution_id": "exec-1", "record": meetup, "remodel_config": CONFIG})
    assert result["statusCode"] == 200
    assert result["execution_id"] == "exec-1"
    assert result["record_count"] == 1
    assert result["records"][0] == {
        "UID": "12345@example.com",
        "name": "Supercool Meetup",
        "location": "Palo Alto CA",
        "DTSTART": "DTSTART;VALUE=DATE_TIME:2014-06-01T18:00:00Z",
        "DESCRIPTION": "Supercool Meetup@Palo Alto CA",
    }


def test_many_records():
    result = RemodelOrchestrator().run_step({
        "records": [{"a": 1}, {"a": 2}],
        "remodel_config": {"transformations": {"b": "a"}},
    })
    assert result["records"] == [{"b": 1}, {"b": 2}]


def test_missing_config_reported():
    result = remodel_handler({"execution_id": "exec-2", "records": []})
    assert result["statusCode"] == 500
    assert result["error_type"] == "ValueError"
    assert result["execution_id"] == "exec-2"


def test_invalid_configuration_reported(meetup):
    result = remodel_handler({"record": meetup, "remodel_config": {"transformations": ["a"]}})
    assert result["statusCode"] == 500
    assert result["error_type"] == "InvalidConfiguration"


def test_compute_failure_reported():
    result = remodel_handler({
        "record": {},
        "remodel_config": {"transformations": {"x": {"operation": "template", "template": "{y}"}}},
    })
    assert result["statusCode"] == 500
    assert result["error_type"] == "KeyError"


def test_non_mapping_record_reported():
    result = remodel_handler({"records": ["nope"], "remodel_config": {}})
    assert result["statusCode"] == 500
    assert "not a mapping" in result["error"]


def test_configure_logging_reads_level(monkeypatch):
    monkeypatch.setenv("REMODELER_LOG_LEVEL", "debug")
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    configure_logging()
    assert calls["level"] == logging.DEBUG


def test_non_mapping_event_reported():
    result = remodel_handler(None)
    assert result["statusCode"] == 500
    assert result["error_type"] == "ValueError"
    assert result["execution_id"] is None


def test_string_pass_through_in_event():
    result = remodel_handler({
        "record": {"a": 1, "b": 2},
        "remodel_config": {"options": {"pass_through": "false"}, "copy_keys": ["a"]},
    })
    assert result["records"] == [{"a": 1}]
