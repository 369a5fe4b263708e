"""
Transformation registry.

Builds a new record from an existing one. For each key of the new record you
register a transformation, which may be one of:
    None (or ""):  use the default transformation, if any, else skip the key
    str:           new[key] = old[str]             (copy / rename)
    callable:      new[key] = fn(old, key)
    mapping:       a named operation, e.g. {"operation": "add_affix", ...}
    rule:          a NoRule / CopyRule / ComputeRule instance, stored as-is

Only registered keys are ever written, so the registry acts as an allow-list
over the output schema.
"""
import dataclasses
import logging
from collections.abc import Mapping as MappingABC
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .exceptions import InvalidConfiguration
from .main_transformer import TransformerOrchestrator
from .rules import NO_RULE, ComputeRule, CopyRule, NoRule, RemodelOptions, Rule, is_rule, parse_flag

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class TransformRegistry:
    """
    Registry of per-key transformation rules with an apply step.

    Builders (copy_keys, exclude_keys, add_key_xform_*) return the registry so
    calls can be chained. Build the registry fully, and optionally freeze() it,
    before sharing it between threads; there is no internal locking.
    """

    def __init__(self,
                 options: Union[RemodelOptions, Mapping[str, Any], None] = None,
                 initial_rules: Optional[Mapping[str, Any]] = None):
        """
        Args:
            options: RemodelOptions, or a dict with the same field names.
            initial_rules: If present, added via add_key_xform_map().
        """
        self._operations = TransformerOrchestrator()
        self.options = self._build_options(options)
        self._rules: Dict[str, Rule] = {}
        self._frozen = False
        if initial_rules:
            self.add_key_xform_map(initial_rules)

    def copy_keys(self, *keys: Union[str, Iterable[str]]) -> 'TransformRegistry':
        """Copy these keys as-is. Each argument is a key or a sequence of keys."""
        names = self._flatten_keys(keys)
        self._check_mutable()
        for name in names:
            self._store(name, CopyRule(name))
        return self

    def exclude_keys(self, *keys: Union[str, Iterable[str]]) -> 'TransformRegistry':
        """Set these keys to NoRule, overriding any earlier rule (e.g. from copy_keys)."""
        names = self._flatten_keys(keys)
        self._check_mutable()
        for name in names:
            self._store(name, NO_RULE)
        return self

    def add_transformation(self, output_key: str, transformation: Any) -> None:
        """Add a single transformation. See the module docstring for accepted values."""
        self._check_key(output_key)
        rule = self._resolve(output_key, transformation, self.options.missing_value)
        self._check_mutable()
        self._store(output_key, rule)

    def add_key_xform_array(self, flat_pairs: Sequence[Any]) -> 'TransformRegistry':
        """
        Configure from [key1, xform1, key2, xform2, ...].

        Raises:
            InvalidConfiguration: If the sequence has an odd number of elements.
        """
        flat_pairs = list(flat_pairs)
        if len(flat_pairs) % 2:
            raise InvalidConfiguration(
                f"Transformation array must have an even number of elements, got {len(flat_pairs)}"
            )
        pairs = [(flat_pairs[i], flat_pairs[i + 1]) for i in range(0, len(flat_pairs), 2)]
        return self._add_pairs(pairs)

    def add_key_xform_map(self, rule_map: Mapping[str, Any]) -> 'TransformRegistry':
        """Configure from a {key: transformation} mapping, in its iteration order."""
        if not isinstance(rule_map, MappingABC):
            raise InvalidConfiguration(
                f"Transformation map must be a mapping, got {type(rule_map).__name__}"
            )
        return self._add_pairs(list(rule_map.items()))

    def add_key_xform_pairs(self, *args: Any) -> 'TransformRegistry':
        """Configure from key/transformation arguments (must be an even number)."""
        return self.add_key_xform_array(args)

    def add_key_xform_tuples(self, pairs: Iterable[Tuple[str, Any]]) -> 'TransformRegistry':
        """Configure from an iterable of (key, transformation) tuples."""
        checked = []
        for item in pairs:
            if not isinstance(item, (tuple, list)) or len(item) != 2:
                raise InvalidConfiguration(
                    f"Expected a (key, transformation) pair, got {item!r}"
                )
            checked.append((item[0], item[1]))
        return self._add_pairs(checked)

    def freeze(self) -> 'TransformRegistry':
        """Make the rule set read-only. Later builder calls raise InvalidConfiguration."""
        self._frozen = True
        logger.debug("Registry frozen with %d rules", len(self._rules))
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def rules(self) -> Mapping[str, Rule]:
        """Read-only view of the registered rules."""
        return MappingProxyType(self._rules)

    def output_keys(self) -> List[str]:
        """Keys apply() writes, in order. Empty in pass-through mode."""
        if self.options.pass_through:
            return []
        return [key for key in self._rules if self._effective_rule(key) is not None]

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, key: object) -> bool:
        return key in self._rules

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(rules={len(self._rules)}, "
                f"pass_through={self.options.pass_through}, frozen={self._frozen})")

    def apply(self, source: Mapping[str, Any], destination: Optional[Record] = None) -> Any:
        """
        Build a record from `source` using the current rules.

        Args:
            source: Record to read from.
            destination: Record to write into. A new dict is created if None.

        Returns:
            `destination` (or the new dict). In pass-through mode, `source` itself.

        Errors raised by compute functions propagate unchanged; keys written
        before the failure stay in `destination`.
        """
        if self.options.pass_through:
            return source

        result = {} if destination is None else destination
        missing = self.options.missing_value

        for key in list(self._rules):
            rule = self._effective_rule(key)
            if rule is None:
                continue
            if isinstance(rule, CopyRule):
                result[key] = source.get(rule.source_key, missing)
            else:
                hint = key if rule.hint is None else rule.hint
                result[key] = rule.fn(source, hint)

        return result

    remodel = apply

    def _effective_rule(self, key: str) -> Optional[Rule]:
        rule = self._rules[key]
        if isinstance(rule, NoRule):
            return self.options.default_transformation
        return rule

    def _add_pairs(self, pairs: List[Tuple[Any, Any]]) -> 'TransformRegistry':
        """Resolve every pair first so a bad entry leaves the rule set unchanged."""
        resolved = []
        for key, transformation in pairs:
            self._check_key(key)
            resolved.append((key, self._resolve(key, transformation, self.options.missing_value)))

        self._check_mutable()
        for key, rule in resolved:
            self._store(key, rule)
        return self

    def _store(self, key: str, rule: Rule) -> None:
        logger.debug("Registered %s for '%s'", type(rule).__name__, key)
        self._rules[key] = rule

    @staticmethod
    def _check_key(key: Any) -> None:
        if not isinstance(key, str):
            raise InvalidConfiguration(f"Output key must be a string, got {key!r}")

    def _check_mutable(self) -> None:
        if self._frozen:
            raise InvalidConfiguration("Registry is frozen and cannot be reconfigured")

    def _resolve(self, output_key: Optional[str], transformation: Any, missing_value: Any) -> Rule:
        """
        Turn a transformation spec into a rule at registration time.

        Operation specs read absent source fields as `missing_value`.
        """
        if is_rule(transformation):
            return transformation
        if transformation is None or transformation == "":
            return NO_RULE
        if isinstance(transformation, str):
            return CopyRule(transformation)
        if isinstance(transformation, MappingABC):
            return self._operations.build_rule(transformation, output_key, missing_value)
        if callable(transformation):
            return ComputeRule(transformation, output_key)
        raise InvalidConfiguration(
            f"Unsupported transformation for '{output_key}': {type(transformation).__name__}"
        )

    def _build_options(self, options: Union[RemodelOptions, Mapping[str, Any], None]) -> RemodelOptions:
        if options is None:
            return RemodelOptions()
        if isinstance(options, MappingABC):
            known = {f.name for f in dataclasses.fields(RemodelOptions)}
            unknown = set(options) - known
            if unknown:
                raise InvalidConfiguration(f"Unknown options: {', '.join(sorted(unknown))}")
            options = RemodelOptions(**options)
        elif not isinstance(options, RemodelOptions):
            raise InvalidConfiguration(
                f"Options must be RemodelOptions or a mapping, got {type(options).__name__}"
            )

        default = options.default_transformation
        if default is not None:
            # A bare callable default gets hint=None, i.e. the key being resolved.
            default = self._resolve(None, default, options.missing_value)
            if isinstance(default, NoRule):
                default = None
        return dataclasses.replace(
            options,
            pass_through=parse_flag('pass_through', options.pass_through),
            default_transformation=default,
        )

    @staticmethod
    def _flatten_keys(keys: Tuple[Union[str, Iterable[str]], ...]) -> List[str]:
        names = []
        for item in keys:
            if isinstance(item, str):
                names.append(item)
                continue
            try:
                items = list(item)
            except TypeError:
                raise InvalidConfiguration(f"Expected a key or a sequence of keys, got {item!r}") from None
            for name in items:
                if not isinstance(name, str):
                    raise InvalidConfiguration(f"Key must be a string, got {name!r}")
                names.append(name)
        return names


Remodeler = TransformRegistry
