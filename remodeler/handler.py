"""
Event handler for remodel requests.
This handler is a lightweight entry point that delegates to the RemodelOrchestrator.
"""

import json
import os
import logging
from collections.abc import Mapping
from typing import Dict, Any

from .orchestration import RemodelOrchestrator

logger = logging.getLogger(__name__)

orchestrator = RemodelOrchestrator()


def configure_logging() -> None:
    """Configure root logging from REMODELER_LOG_LEVEL."""
    log_level = os.getenv("REMODELER_LOG_LEVEL", "INFO").upper()
    numeric_level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )


def remodel_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """
    Handler that delegates to the RemodelOrchestrator.

    Args:
        event: Event with 'remodel_config' and 'records' or 'record'.
        context: Caller context object (unused).

    Returns:
        A dictionary with the result of the step execution.
    """
    logger.info("Remodel handler invoked with event: %s", json.dumps(event, default=str))

    try:
        result = orchestrator.run_step(event)
        logger.info("Remodel handler completed successfully.")
        return result

    except Exception as e:
        logger.exception("Error during remodel")
        return {
            "statusCode": 500,
            "error": str(e),
            "error_type": type(e).__name__,
            "execution_id": event.get('execution_id') if isinstance(event, Mapping) else None,
        }


# For local testing
if __name__ == "__main__":
    configure_logging()

    test_event = {
        "execution_id": "local-test-exec-123",
        "record": {
            "UID": "12345@example.com",
            "name": "Supercool Meetup",
            "location": "Palo Alto CA",
            "when": "2014-06-01T18:00:00Z",
        },
        "remodel_config": {
            "copy_keys": ["UID", "name", "location", "when"],
            "exclude_keys": ["when"],
            "transformations": {
                "DTSTART": {"operation": "add_affix", "source": "when",
                            "prefix": "DTSTART;VALUE=DATE_TIME:"},
                "DESCRIPTION": {"operation": "template", "template": "{name}@{location}"},
            },
        },
    }

    result = remodel_handler(test_event)
    print(json.dumps(result, indent=2))
