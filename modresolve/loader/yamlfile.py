"""
Loader for YAML descriptor files. Uses PyYaml library.

Each document is either a single !module mapping or a list of them:

    --- !module
    name: OUUDeveloper
    public: [Core, CoreUObject, Engine]
    private: [Slate]
    rules:
      - !editor_only [UnrealEd]
      - !developer_tools {definition: WITH_GAMEPLAY_DEBUGGER,
                          dependency: GameplayDebugger}
      - !optional_module {definition: WITH_FOO, module: Foo}
      - !define {name: OUU_DEVELOPER_API_VERSION, value: "2"}
      - !with_capability {capability: live_coding, modules: [LiveCoding]}
      - !gameplay_debugger
"""

import io

import yaml

try:
    from yaml import CSafeLoader as YamlLoader
except ImportError:
    from yaml import SafeLoader as YamlLoader

from modresolve.core import ModuleDescriptor
from modresolve.core import define
from modresolve.core import developer_tools
from modresolve.core import editor_only
from modresolve.core import gameplay_debugger
from modresolve.core import optional_module
from modresolve.core import with_capability
from modresolve.errors import DescriptorError
from modresolve.loader import loader_for
from modresolve.loader.errors import LoaderError
from modresolve.loader.errors import YamlFileError


FILENAME = 'Modrules.yaml'


def _names(value):
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _fields(mapping, required=(), optional=()):
    unknown = set(mapping).difference(required, optional)
    if unknown:
        raise DescriptorError('Unknown field(s): %s', ', '.join(sorted(
            map(str, unknown))))
    missing = [key for key in required if key not in mapping]
    if missing:
        raise DescriptorError('Missing field(s): %s', ', '.join(missing))
    return [mapping.get(key) for key in tuple(required) + tuple(optional)]


def construct_module(loader, node):
    mapping = loader.construct_mapping(node, deep=True)
    name, public, private, rules = _fields(
        mapping, required=['name'], optional=['public', 'private', 'rules'])
    return ModuleDescriptor(name, _names(public), _names(private),
                            rules or [],
                            location=(node.start_mark.name,
                                      node.start_mark.line + 1))

def construct_editor_only(loader, node):
    if isinstance(node, yaml.ScalarNode):
        return editor_only(loader.construct_scalar(node))
    return editor_only(*loader.construct_sequence(node, deep=True))

def construct_developer_tools(loader, node):
    return developer_tools(*_fields(loader.construct_mapping(node),
                                    required=['definition', 'dependency']))

def construct_optional_module(loader, node):
    return optional_module(*_fields(loader.construct_mapping(node),
                                    required=['definition', 'module']))

def construct_define(loader, node):
    name, value = _fields(loader.construct_mapping(node),
                          required=['name'], optional=['value'])
    if value is None:
        value = True
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    return define(name, value)

def construct_with_capability(loader, node):
    capability, modules = _fields(loader.construct_mapping(node, deep=True),
                                  required=['capability', 'modules'])
    return with_capability(capability, *_names(modules))

def construct_gameplay_debugger(loader, node):
    return gameplay_debugger()


constructors = {
    '!module':            construct_module,
    '!editor_only':       construct_editor_only,
    '!developer_tools':   construct_developer_tools,
    '!optional_module':   construct_optional_module,
    '!define':            construct_define,
    '!with_capability':   construct_with_capability,
    '!gameplay_debugger': construct_gameplay_debugger,
}


def _wrap_constructor(func):
    def constructor(loader, node):
        try:
            return func(loader, node)
        except (DescriptorError, TypeError) as e:
            raise YamlFileError(str(e), node.start_mark)
    return constructor


class ModrulesYamlLoader(YamlLoader):
    pass

for tag, func in constructors.items():
    ModrulesYamlLoader.add_constructor(tag, _wrap_constructor(func))


def load_yaml(stream):
    """Returns a list of ModuleDescriptor objects found in a YAML stream."""
    descriptors = []

    try:
        for doc in yaml.load_all(stream, Loader=ModrulesYamlLoader):
            if doc is None:
                continue
            docs = doc if isinstance(doc, list) else [doc]
            for descriptor in docs:
                if not isinstance(descriptor, ModuleDescriptor):
                    raise YamlFileError('Expected a !module, got %r'
                                        % (descriptor,))
                descriptors.append(descriptor)

    except yaml.YAMLError as e:
        raise YamlFileError(str(e))

    return descriptors


@loader_for(FILENAME)
def load_yamlfile(path):
    try:
        with io.open(path, encoding='utf-8') as f:
            return load_yaml(f)
    except (IOError, UnicodeDecodeError) as e:
        raise LoaderError("Error while reading '%s': %s" % (path, e))
