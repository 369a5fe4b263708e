"""
Base transformer interface for the operation plugin registry.
All operation plugins must inherit from this base class.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping

from ..exceptions import InvalidConfiguration


class BaseTransformer(ABC):
    """
    Abstract base class for all operation plugins.

    One instance is built per registered rule: `validate` and `prepare` run
    once at registration, `execute` runs on every apply. `execute` takes:
    - source: The whole source record
    - config: The rule spec, e.g. {"operation": "add_affix", "prefix": "X-"}
    - context: Runtime context ('output_key', 'hint' and 'missing_value')

    Returns:
        The value to store under the output key
    """

    required_keys: tuple = ()
    string_keys: tuple = ('source',)

    def validate(self, config: Mapping[str, Any]) -> None:
        """
        Check the rule spec when the rule is registered.

        Raises:
            InvalidConfiguration: If a required parameter is missing or not a string
        """
        missing = [key for key in self.required_keys if config.get(key) is None]
        if missing:
            raise InvalidConfiguration(
                f"{type(self).__name__} requires {', '.join(repr(k) for k in missing)} in config"
            )
        for key in self.string_keys + self.required_keys:
            value = config.get(key)
            if value is not None and not isinstance(value, str):
                raise InvalidConfiguration(
                    f"{type(self).__name__} parameter '{key}' must be a string, got {type(value).__name__}"
                )

    def prepare(self, config: Mapping[str, Any]) -> None:
        """Build any per-rule state from a validated spec."""

    def source_value(self, source: Mapping[str, Any], config: Mapping[str, Any],
                     context: Dict[str, Any]) -> Any:
        """Read the field named by config['source'], falling back to the hint."""
        key = config.get('source') or context.get('hint')
        return source.get(key, context.get('missing_value'))

    @abstractmethod
    def execute(self, source: Mapping[str, Any], config: Mapping[str, Any], context: Dict[str, Any]) -> Any:
        """
        Execute the operation.

        Args:
            source: Source record
            config: Operation-specific configuration
            context: Runtime context (output_key, hint, missing_value)

        Returns:
            Computed value
        """
        pass
