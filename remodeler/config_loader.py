import os
import json
import logging
from collections.abc import Mapping

import yaml
from dotenv import load_dotenv

from .exceptions import InvalidConfiguration
from .registry import TransformRegistry

logger = logging.getLogger(__name__)

SECTION_KEYS = ('options', 'copy_keys', 'exclude_keys', 'transformations')


class UniversalConfig:
    def __init__(self, env_file=".env", yaml_file=None, json_file=None):
        load_dotenv(env_file)
        self.yaml_config = self._load_yaml(yaml_file) if yaml_file else {}
        self.json_config = self._load_json(json_file) if json_file else {}

    def _load_yaml(self, file):
        with open(file) as f:
            return yaml.safe_load(f) or {}

    def _load_json(self, file):
        with open(file) as f:
            return json.load(f)

    def get(self, key_path, default=None):
        # Check ENV first
        val = os.getenv(key_path)
        if val:
            return val

        # Check YAML nested keys
        value = self.yaml_config
        for k in key_path.split("."):
            if not isinstance(value, Mapping) or k not in value:
                value = None
                break
            value = value[k]
        if value is not None:
            return value

        # Check JSON
        if key_path in self.json_config:
            return self.json_config[key_path]

        return default

    def load_registry(self, key="remodel"):
        """Build a TransformRegistry from the `key` section of the config."""
        section = self.get(key)
        if section is None:
            raise InvalidConfiguration(f"No '{key}' section found in config")
        if not isinstance(section, Mapping):
            raise InvalidConfiguration(f"Config section '{key}' must be a mapping")

        pass_through = os.getenv("REMODELER_PASS_THROUGH")
        if pass_through:
            options = dict(section.get('options') or {})
            options['pass_through'] = pass_through
            section = {**section, 'options': options}

        return build_registry(section)


def build_registry(section):
    """
    Build a TransformRegistry from a config mapping such as:

        options: {pass_through: false, default_transformation: fallback}
        copy_keys: [UID, name]
        exclude_keys: [when]
        transformations: {DESCRIPTION: {operation: template, template: "{name}"}}

    copy_keys, exclude_keys and transformations are applied in that order.
    transformations may be a mapping or a flat [key, xform, ...] list.
    """
    if not isinstance(section, Mapping):
        raise InvalidConfiguration(f"Remodel config must be a mapping, got {type(section).__name__}")

    unknown = set(section) - set(SECTION_KEYS)
    if unknown:
        raise InvalidConfiguration(f"Unknown remodel config keys: {', '.join(sorted(unknown))}")

    registry = TransformRegistry(section.get('options'))

    if section.get('copy_keys'):
        registry.copy_keys(section['copy_keys'])
    if section.get('exclude_keys'):
        registry.exclude_keys(section['exclude_keys'])

    transformations = section.get('transformations')
    if isinstance(transformations, Mapping):
        registry.add_key_xform_map(transformations)
    elif isinstance(transformations, list):
        registry.add_key_xform_array(transformations)
    elif transformations is not None:
        raise InvalidConfiguration("'transformations' must be a mapping or a flat list")

    logger.info("Built registry with %d rules", len(registry))
    return registry
