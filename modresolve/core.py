"""
Modresolve core types: module descriptors, their conditional rules and the
target environment they are evaluated against.
"""

__all__ = [
    "DEBUG",
    "DEBUG_GAME",
    "DEVELOPMENT",
    "TEST",
    "SHIPPING",
    "CONFIGURATIONS",

    "parse_version",
    "TargetEnvironment",

    "Rule",
    "EditorOnlyDependency",
    "DeveloperToolsFeature",
    "OptionalModuleFeature",
    "Definition",
    "CapabilityDependency",

    "editor_only",
    "developer_tools",
    "optional_module",
    "define",
    "with_capability",
    "gameplay_debugger",

    "ModuleDescriptor",
    "ResolvedModule",
]


from collections import namedtuple
from itertools import chain
from operator import attrgetter
from types import MappingProxyType

from modresolve.errors import DescriptorError


# Configuration tiers, from the least to the most optimized one.

DEBUG       = 'Debug'
DEBUG_GAME  = 'DebugGame'
DEVELOPMENT = 'Development'
TEST        = 'Test'
SHIPPING    = 'Shipping'

CONFIGURATIONS = (DEBUG, DEBUG_GAME, DEVELOPMENT, TEST, SHIPPING)


def parse_version(version):
    """Converts '5.1', (5, 1) or 5 into a tuple of ints. None passes through.

    >>> parse_version('5.1.2')
    (5, 1, 2)
    >>> parse_version('5.1.0')
    (5, 1)
    """
    if version is None:
        return None
    if isinstance(version, bool):
        raise ValueError('Invalid version: %r' % version)
    if isinstance(version, int):
        return (version,)
    if isinstance(version, float):
        version = repr(version)
    if isinstance(version, str):
        version = version.strip().split('.')

    try:
        ret = tuple(int(part) for part in version)
    except (TypeError, ValueError):
        raise ValueError('Invalid version: %r' % (version,))
    if not ret or any(part < 0 for part in ret):
        raise ValueError('Invalid version: %r' % (version,))

    # Trailing zeros are insignificant: 5.1 == 5.1.0
    while len(ret) > 1 and ret[-1] == 0:
        ret = ret[:-1]
    return ret


class TargetEnvironment(object):
    """
    Immutable snapshot of build parameters.

    Capability flags are computed once here, either listed explicitly or
    gated by an engine version: a capability_versions entry {'cap': '5.1'}
    grants 'cap' to any engine at or after 5.1.
    """

    __slots__ = ('_configuration', '_is_editor_build',
                 '_build_developer_tools', '_engine_version', '_capabilities')

    configuration         = property(attrgetter('_configuration'))
    is_editor_build       = property(attrgetter('_is_editor_build'))
    build_developer_tools = property(attrgetter('_build_developer_tools'))
    engine_version        = property(attrgetter('_engine_version'))
    capabilities          = property(attrgetter('_capabilities'))

    def __init__(self, configuration=DEVELOPMENT, is_editor_build=False,
                 build_developer_tools=False, engine_version=None,
                 capabilities=(), capability_versions=None):
        super(TargetEnvironment, self).__init__()

        if configuration not in CONFIGURATIONS:
            raise ValueError("Unknown configuration '%s', expected one of: %s"
                             % (configuration, ', '.join(CONFIGURATIONS)))

        engine_version = parse_version(engine_version)

        caps = set(capabilities)
        for capability, min_version in (capability_versions or {}).items():
            if (engine_version is not None and
                    engine_version >= parse_version(min_version)):
                caps.add(capability)

        init = super(TargetEnvironment, self).__setattr__
        init('_configuration', configuration)
        init('_is_editor_build', bool(is_editor_build))
        init('_build_developer_tools', bool(build_developer_tools))
        init('_engine_version', engine_version)
        init('_capabilities', frozenset(caps))

    def __setattr__(self, attr, value):
        raise AttributeError("'%s' object is immutable" % type(self).__name__)

    def has_capability(self, capability):
        return capability in self._capabilities

    @property
    def developer_tools_enabled(self):
        """True when developer/debugger features are compiled in."""
        return (self._build_developer_tools or
                self._configuration not in (SHIPPING, TEST))

    def _key(self):
        return (self._configuration, self._is_editor_build,
                self._build_developer_tools, self._engine_version,
                self._capabilities)

    def __eq__(self, other):
        if not isinstance(other, TargetEnvironment):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        version = ('.'.join(map(str, self._engine_version))
                   if self._engine_version is not None else None)
        return ('{cls}({self._configuration}, editor={self._is_editor_build}, '
                'developer_tools={self._build_developer_tools}, '
                'engine_version={version}, capabilities={caps})'
                .format(cls=type(self).__name__, self=self, version=version,
                        caps=sorted(self._capabilities)))


def _check_name(name, what='module name'):
    if not isinstance(name, str) or not name:
        raise DescriptorError('Invalid %s: %r', what, name)
    return name

def _check_names(names, what='module name'):
    if isinstance(names, str):
        names = (names,)
    return tuple(_check_name(name, what) for name in names)


class Rule(object):
    """Mixin for conditional rule types."""
    __slots__ = ()

    kind = None  # rule name as spelled in descriptor files

    # Rules of different kinds may happen to hold equal fields.
    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(type(self)) ^ tuple.__hash__(self)

    def dependency_names(self):
        """Names of modules the rule may ever add as a dependency."""
        return ()


class EditorOnlyDependency(Rule, namedtuple('EditorOnlyDependency',
                                            'target_names')):
    """Private dependencies of editor builds only."""
    __slots__ = ()

    kind = 'editor_only'

    def __new__(cls, target_names):
        return super(EditorOnlyDependency, cls).__new__(
            cls, _check_names(target_names))

    def dependency_names(self):
        return self.target_names


class DeveloperToolsFeature(Rule, namedtuple('DeveloperToolsFeature',
                                             'definition_name '
                                             'dependency_name')):
    """
    Feature compiled in with developer tools or in any configuration other
    than Shipping and Test. When enabled, the guarded dependency becomes a
    public one.
    """
    __slots__ = ()

    kind = 'developer_tools'

    def __new__(cls, definition_name, dependency_name):
        return super(DeveloperToolsFeature, cls).__new__(
            cls, _check_name(definition_name, 'definition name'),
            _check_name(dependency_name))

    def dependency_names(self):
        return (self.dependency_name,)


class OptionalModuleFeature(Rule, namedtuple('OptionalModuleFeature',
                                             'definition_name '
                                             'probed_module_name')):
    """Records whether a module is present. Never adds an edge."""
    __slots__ = ()

    kind = 'optional_module'

    def __new__(cls, definition_name, probed_module_name):
        return super(OptionalModuleFeature, cls).__new__(
            cls, _check_name(definition_name, 'definition name'),
            _check_name(probed_module_name))


class Definition(Rule, namedtuple('Definition', 'definition_name value')):
    """Unconditional compile definition."""
    __slots__ = ()

    kind = 'define'

    def __new__(cls, definition_name, value=True):
        if not isinstance(value, (bool, str)):
            raise DescriptorError("Definition '%s' must be a bool or a "
                                  "string, got %r", definition_name, value)
        return super(Definition, cls).__new__(
            cls, _check_name(definition_name, 'definition name'), value)


class CapabilityDependency(Rule, namedtuple('CapabilityDependency',
                                            'capability target_names')):
    """Private dependencies added when the target has a capability flag."""
    __slots__ = ()

    kind = 'with_capability'

    def __new__(cls, capability, target_names):
        return super(CapabilityDependency, cls).__new__(
            cls, _check_name(capability, 'capability'),
            _check_names(target_names))

    def dependency_names(self):
        return self.target_names


# Named rule constructors.

def editor_only(*names):
    return EditorOnlyDependency(names)

def developer_tools(definition, dependency):
    return DeveloperToolsFeature(definition, dependency)

def optional_module(definition, module):
    return OptionalModuleFeature(definition, module)

def define(name, value=True):
    return Definition(name, value)

def with_capability(capability, *names):
    return CapabilityDependency(capability, names)

def gameplay_debugger():
    return DeveloperToolsFeature('WITH_GAMEPLAY_DEBUGGER', 'GameplayDebugger')


class ModuleDescriptor(object):
    """Immutable declaration of a single module.

    Args:
        name (str): unique module name.
        public_dependencies: module names visible to dependents.
        private_dependencies: module names used by the implementation only.
        rules: a sequence of Rule objects, evaluated in order.
        location: optional (filename, lineno) pair for diagnostics, it does
            not participate in comparisons.
    """

    __slots__ = ('_name', '_public_dependencies', '_private_dependencies',
                 '_rules', '_location')

    name                 = property(attrgetter('_name'))
    public_dependencies  = property(attrgetter('_public_dependencies'))
    private_dependencies = property(attrgetter('_private_dependencies'))
    rules                = property(attrgetter('_rules'))
    location             = property(attrgetter('_location'))

    def __init__(self, name, public_dependencies=(), private_dependencies=(),
                 rules=(), location=None):
        super(ModuleDescriptor, self).__init__()

        rules = tuple(rules)
        for rule in rules:
            if not isinstance(rule, Rule):
                raise DescriptorError("Module '%s': not a rule: %r",
                                      name, rule)

        init = super(ModuleDescriptor, self).__setattr__
        init('_name', _check_name(name))
        init('_public_dependencies', _check_names(public_dependencies))
        init('_private_dependencies', _check_names(private_dependencies))
        init('_rules', rules)
        init('_location', location)

        if name in self.all_dependency_names():
            raise DescriptorError("Module '%s' depends on itself", name)

    def __setattr__(self, attr, value):
        raise AttributeError("'%s' object is immutable" % type(self).__name__)

    def all_dependency_names(self):
        """Every name the module may depend on, whatever the target is."""
        return frozenset(chain(self._public_dependencies,
                               self._private_dependencies,
                               *(rule.dependency_names()
                                 for rule in self._rules)))

    def _key(self):
        return (self._name, self._public_dependencies,
                self._private_dependencies, self._rules)

    def __eq__(self, other):
        if not isinstance(other, ModuleDescriptor):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return '{cls}({self._name!r})'.format(cls=type(self).__name__,
                                               self=self)


class ResolvedModule(namedtuple('ResolvedModule',
                                'name public_dependencies '
                                'private_dependencies definitions')):
    """Outcome of evaluating a descriptor against a target environment."""
    __slots__ = ()

    def __new__(cls, name, public_dependencies=(), private_dependencies=(),
                definitions=None):
        public  = frozenset(public_dependencies)
        private = frozenset(private_dependencies) - public
        return super(ResolvedModule, cls).__new__(
            cls, name, public, private,
            MappingProxyType(dict(definitions or {})))

    @property
    def dependencies(self):
        return self.public_dependencies | self.private_dependencies

    def __hash__(self):
        return hash((self.name, self.public_dependencies,
                     self.private_dependencies,
                     frozenset(self.definitions.items())))
