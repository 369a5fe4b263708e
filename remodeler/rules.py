"""
Transformation rules and registry options.

A rule says how one output key gets its value:
    NoRule:      nothing, unless the registry has a default transformation
    CopyRule:    copy a single key from the source record
    ComputeRule: call fn(source, hint) and store the result
"""
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from .exceptions import InvalidConfiguration


@dataclass(frozen=True)
class NoRule:
    """Explicit "no rule" for an output key."""


@dataclass(frozen=True)
class CopyRule:
    """Copy source[source_key] into the output key."""
    source_key: str


@dataclass(frozen=True)
class ComputeRule:
    """
    Compute the output value from the whole source record.

    `hint` is passed to `fn` as its second argument. When it is None the
    output key being resolved is passed instead.
    """
    fn: Callable[[Mapping[str, Any], str], Any]
    hint: Optional[str] = None


Rule = Union[NoRule, CopyRule, ComputeRule]

NO_RULE = NoRule()


def is_rule(value: Any) -> bool:
    """Check if value is already a rule instance."""
    return isinstance(value, (NoRule, CopyRule, ComputeRule))


@dataclass(frozen=True)
class RemodelOptions:
    """
    Registry options, fixed for the lifetime of a registry.

    pass_through: apply() returns the source record untouched
    default_transformation: rule used for keys registered with NoRule
    missing_value: written when a copied source key is absent
    """
    pass_through: bool = False
    default_transformation: Optional[Rule] = None
    missing_value: Any = None


TRUTHY = {'1', 'true', 'yes', 'on'}
FALSY = {'0', 'false', 'no', 'off', ''}


def parse_flag(name: str, value: Any) -> bool:
    """
    Read a boolean option that may arrive as a string from JSON, YAML or the environment.

    Raises:
        InvalidConfiguration: If the value is neither a bool nor a recognised flag string
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        flag = value.strip().lower()
        if flag in TRUTHY:
            return True
        if flag in FALSY:
            return False
    raise InvalidConfiguration(f"Option '{name}' must be a boolean, got {value!r}")
