"""
Operation orchestrator.
Routes declarative rule specs to the matching operation plugin.
"""
import logging
from typing import Any, Mapping, Optional

from .exceptions import InvalidConfiguration
from .rules import ComputeRule
from .transformers import TRANSFORMER_REGISTRY

logger = logging.getLogger(__name__)


class TransformerOrchestrator:
    """
    Builds compute rules from operation specs using the plugin registry.

    A spec names its operation plus operation-specific parameters, e.g.
    {"operation": "add_affix", "source": "ref", "prefix": "DEPT-"}.
    """

    def __init__(self):
        self.registry = TRANSFORMER_REGISTRY

    def build_rule(self, config: Mapping[str, Any], output_key: Optional[str] = None,
                   missing_value: Any = None) -> ComputeRule:
        """
        Build a compute rule for an operation spec.

        Args:
            config: Operation spec containing:
                - operation: Name of the operation (must be in TRANSFORMER_REGISTRY)
                - any parameters the operation takes
            output_key: Key the rule is registered under. Passed to the
                operation as its hint; None means "the key being resolved".
            missing_value: Value operations read for an absent source field.

        Returns:
            ComputeRule calling the operation plugin

        Raises:
            InvalidConfiguration: If operation is missing, unknown, or misconfigured
        """
        operation = config.get('operation')

        if not operation:
            raise InvalidConfiguration("Operation spec must specify 'operation' field")

        transformer_class = self.registry.get(operation)

        if not transformer_class:
            available_ops = ', '.join(self.registry.keys())
            raise InvalidConfiguration(
                f"Unknown operation '{operation}'. "
                f"Available operations: {available_ops}"
            )

        transformer = transformer_class()
        params = dict(config)
        transformer.validate(params)
        transformer.prepare(params)
        context = {'output_key': output_key, 'missing_value': missing_value}
        logger.debug("Built '%s' operation for key '%s'", operation, output_key)

        def compute(source, hint):
            return transformer.execute(source, params, {**context, 'hint': hint})

        return ComputeRule(compute, output_key)

    def list_operations(self):
        """Return list of available operations."""
        return list(self.registry.keys())
