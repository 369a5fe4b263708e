"""
Declarative record remodeling: build a new record from an existing one
using per-key copy, rename or computed transformations.
"""
from .exceptions import InvalidConfiguration, RemodelerError
from .registry import Remodeler, TransformRegistry
from .rules import NO_RULE, ComputeRule, CopyRule, NoRule, RemodelOptions

__all__ = [
    'TransformRegistry',
    'Remodeler',
    'RemodelOptions',
    'NoRule',
    'CopyRule',
    'ComputeRule',
    'NO_RULE',
    'RemodelerError',
    'InvalidConfiguration',
]
