"""
Operation plugin registry.
Maps operation names to transformer classes.
"""
from .base import BaseTransformer
from .generic.text_replace import TextReplaceTransformer
from .generic.simple_affix import SimpleAffixTransformer
from .generic.template import TemplateTransformer


# Plugin registry mapping operation names to transformer classes
TRANSFORMER_REGISTRY = {
    'replace_text': TextReplaceTransformer,
    'add_affix': SimpleAffixTransformer,
    'template': TemplateTransformer,
}


__all__ = [
    'BaseTransformer',
    'TRANSFORMER_REGISTRY',
    'TextReplaceTransformer',
    'SimpleAffixTransformer',
    'TemplateTransformer',
]
