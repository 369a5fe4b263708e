"""
Generic text replacement operation.
"""
import re
import logging
from typing import Any, Dict, Mapping

from ..base import BaseTransformer

logger = logging.getLogger(__name__)


class TextReplaceTransformer(BaseTransformer):
    """
    Replaces text in a string field of the source record based on a regex pattern.
    Non-string values are returned unchanged.

    Config parameters:
        source: Source key to read (optional, defaults to the hint).
        match: The regex pattern to search for.
        replace: The string to replace matches with.
    """

    required_keys = ('match', 'replace')

    def prepare(self, config: Mapping[str, Any]) -> None:
        self.logic = TextReplaceLogic(
            match=config['match'],
            replace=config['replace']
        )

    def execute(self, source: Mapping[str, Any], config: Mapping[str, Any], context: Dict[str, Any]) -> Any:
        """
        Apply text replacement.

        Args:
            source: Source record.
            config: Must contain 'match' and 'replace'. Can contain 'source'.
            context: Runtime context.

        Returns:
            The replaced string, or the original value if it is not a string.
        """
        return self.logic.transform(self.source_value(source, config, context))


class TextReplaceLogic:
    def __init__(self, match: str = "", replace: str = ""):
        self.match = match
        self.replace = replace
        try:
            self.regex = re.compile(self.match)
        except re.error as e:
            # Not a valid regex: treat 'match' as literal text
            logger.warning("Regex error: %s. Falling back to simple string replacement.", e)
            self.regex = None

    def transform(self, s: Any) -> Any:
        """Apply the replacement policy to a single string."""
        if not isinstance(s, str):
            return s

        # Normalize line endings to handle cross-platform variations
        text = s.replace('\r\n', '\n').replace('\r', '\n')

        if self.regex is None:
            return text.replace(self.match, self.replace)
        return self.regex.sub(self.replace, text)
