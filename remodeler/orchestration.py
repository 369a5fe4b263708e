"""
Orchestrates a single remodel step for an in-memory event payload.
"""
import logging
from collections.abc import Mapping
from typing import Any, Dict, List

from .config_loader import build_registry

logger = logging.getLogger(__name__)


class RemodelOrchestrator:
    """
    Handles the logic for one remodel step: build the registry described by
    the event and apply it to the event's records.
    """

    def run_step(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Executes a remodel step based on the event payload.

        Args:
            event: Dict with 'remodel_config' (registry config section),
                'records' (list of records) or 'record' (a single record),
                and optionally 'execution_id'.

        Returns:
            A dictionary with the result of the step execution.
        """
        logger.info("Orchestrator running step")

        if not isinstance(event, Mapping):
            raise ValueError(f"Event must be a mapping, got {type(event).__name__}")

        execution_id = event.get('execution_id')
        remodel_config = event.get('remodel_config')
        if remodel_config is None:
            raise ValueError("Event must specify 'remodel_config'")

        records = self._load_records(event)
        registry = build_registry(remodel_config)

        logger.info(
            "Remodeling %d records with %d rules for execution %s",
            len(records),
            len(registry),
            execution_id
        )
        output = [registry.apply(record) for record in records]
        logger.info("Step completed successfully")

        return {
            "statusCode": 200,
            "execution_id": execution_id,
            "record_count": len(output),
            "records": output,
        }

    def _load_records(self, event: Dict[str, Any]) -> List[Any]:
        """Returns the event's records as a list."""
        if 'records' in event:
            records = event['records']
            if not isinstance(records, list):
                raise ValueError("'records' must be a list")
        elif 'record' in event:
            records = [event['record']]
        else:
            raise ValueError("Event must specify 'records' or 'record'")

        for i, record in enumerate(records):
            if not isinstance(record, Mapping):
                raise ValueError(f"Record {i} is not a mapping: {type(record).__name__}")
        return records
