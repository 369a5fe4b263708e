"""
Generic affix operation to add prefixes or suffixes to a string field.
"""
from typing import Any, Dict, Mapping, Optional

from ...exceptions import InvalidConfiguration
from ..base import BaseTransformer


class SimpleAffixTransformer(BaseTransformer):
    """
    Adds a simple prefix and/or suffix to a string field of the source record.
    Non-string values are returned unchanged.

    Config parameters:
        source: Source key to read (optional, defaults to the hint).
        prefix: String to prepend (optional).
        suffix: String to append (optional).
    """

    string_keys = ('source', 'prefix', 'suffix')

    def validate(self, config: Mapping[str, Any]) -> None:
        super().validate(config)
        if not config.get('prefix') and not config.get('suffix'):
            raise InvalidConfiguration("SimpleAffixTransformer requires 'prefix' and/or 'suffix' in config")

    def prepare(self, config: Mapping[str, Any]) -> None:
        self.logic = AffixLogic(
            prefix=config.get('prefix'),
            suffix=config.get('suffix')
        )

    def execute(self, source: Mapping[str, Any], config: Mapping[str, Any], context: Dict[str, Any]) -> Any:
        """
        Apply the affixes.

        Args:
            source: Source record.
            config: May contain 'source', 'prefix', 'suffix'.
            context: Runtime context.

        Returns:
            The affixed string, or the original value if it is not a string.
        """
        return self.logic.transform(self.source_value(source, config, context))


class AffixLogic:
    """Logic for applying prefixes and suffixes."""

    def __init__(self,
                 prefix: Optional[str] = None,
                 suffix: Optional[str] = None):
        self.prefix = prefix or ""
        self.suffix = suffix or ""

    def transform(self, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        return f"{self.prefix}{value}{self.suffix}"
