"""
Target environment configuration.

A target file is a YAML mapping, every key is optional:

    configuration: Development     # Debug, DebugGame, Development, Test, Shipping
    editor: true
    developer_tools: false
    engine_version: "5.1"
    capabilities: [live_coding]
    capability_versions:           # granted to engines at or after a version
      world_partition: "5.0"
"""

__all__ = [
    "ConfigFileError",
    "TARGET_KEYS",
    "DEFAULT_TARGET",
    "target_from_mapping",
    "capability_names",
    "load_target_mapping",
    "load_target",
]


import io

import yaml

from modresolve.core import TargetEnvironment
from modresolve.errors import ModresolveError


class ConfigFileError(ModresolveError):
    pass


# file key -> TargetEnvironment argument
TARGET_KEYS = {
    'configuration':       'configuration',
    'editor':              'is_editor_build',
    'developer_tools':     'build_developer_tools',
    'engine_version':      'engine_version',
    'capabilities':        'capabilities',
    'capability_versions': 'capability_versions',
}

DEFAULT_TARGET = TargetEnvironment()


def _check_bool(key, value):
    if not isinstance(value, bool):
        raise ConfigFileError("'%s' must be true or false, got %r", key, value)
    return value


def target_from_mapping(mapping, **overrides):
    """Creates a TargetEnvironment from a mapping using the file keys.

    Keyword overrides use TargetEnvironment argument names and take
    precedence over the mapping, None values are ignored.
    """
    if mapping is None:
        mapping = {}
    if not hasattr(mapping, 'items'):
        raise ConfigFileError('Target configuration must be a mapping, got %r',
                              mapping)

    unknown = set(mapping).difference(TARGET_KEYS)
    if unknown:
        raise ConfigFileError('Unknown target key(s): %s',
                              ', '.join(sorted(map(str, unknown))))

    kwargs = {}
    for key, value in mapping.items():
        if key in ('editor', 'developer_tools'):
            value = _check_bool(key, value)
        elif key == 'capabilities':
            value = capability_names(value)
        kwargs[TARGET_KEYS[key]] = value

    kwargs.update((arg, value) for arg, value in overrides.items()
                  if value is not None)

    try:
        return TargetEnvironment(**kwargs)
    except ValueError as e:
        raise ConfigFileError('Invalid target configuration: %s', e)


def capability_names(value):
    """Accepts a single name, a list of names or None."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    try:
        return list(value)
    except TypeError:
        raise ConfigFileError("'capabilities' must list names, got %r", value)


def load_target_mapping(path):
    """Reads the raw target mapping from a YAML file, without applying it.

    Callers that merge other settings in must do it before the mapping is
    turned into a TargetEnvironment, so that capability_versions are gated
    by the final engine_version.
    """
    try:
        with io.open(path, encoding='utf-8') as f:
            mapping = yaml.safe_load(f)
    except IOError as e:
        raise ConfigFileError("Error while reading '%s': %s", path, e)
    except yaml.YAMLError as e:
        raise ConfigFileError("Invalid YAML in '%s': %s", path, e)

    if mapping is None:
        return {}
    if not isinstance(mapping, dict):
        raise ConfigFileError("'%s' must hold a mapping, got %r",
                              path, mapping)
    return mapping


def load_target(path, **overrides):
    """Reads a TargetEnvironment from a YAML file."""
    return target_from_mapping(load_target_mapping(path), **overrides)
