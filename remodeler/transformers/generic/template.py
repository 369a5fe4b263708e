"""
Template operation: builds a string from several source fields.
"""
from typing import Any, Dict, Mapping

from ..base import BaseTransformer


class TemplateTransformer(BaseTransformer):
    """
    Formats a template with the source record's fields, e.g. "{name}@{location}".
    A field missing from the source raises KeyError when the rule is applied.

    Config parameters:
        template: str.format-style template.
    """

    required_keys = ('template',)

    def execute(self, source: Mapping[str, Any], config: Mapping[str, Any], context: Dict[str, Any]) -> Any:
        return config['template'].format_map(source)
