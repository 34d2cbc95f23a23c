"""
Dependency rule evaluator.

Turns a single ModuleDescriptor into a ResolvedModule for a given target
environment and module inventory. Evaluation of one module never looks at
any other module, so a batch of descriptors may be evaluated in parallel.
"""

__all__ = [
    "rule_handler",
    "probe_exists",
    "evaluate",
    "evaluate_all",
]


from concurrent.futures import ThreadPoolExecutor

from modresolve.core import CapabilityDependency
from modresolve.core import Definition
from modresolve.core import DeveloperToolsFeature
from modresolve.core import EditorOnlyDependency
from modresolve.core import OptionalModuleFeature
from modresolve.core import ResolvedModule
from modresolve.errors import InventoryProbeFailure

import logging
logger = logging.getLogger(__name__)


_handlers = {}

def rule_handler(rule_type):
    """Deco-maker for registering a function applying rules of a type.

    The function is called with (rule, state, target, inventory) and
    updates the state in place.
    """

    def decorator(func):
        if rule_type in _handlers:
            prev = _handlers[rule_type]
            raise ValueError("Handler for '{rule_type.__name__}' is already "
                             "registered {prev}".format(**locals()))
        _handlers[rule_type] = func
        return func

    return decorator

def _handler_for(rule):
    for rule_type in type(rule).__mro__:
        try:
            return _handlers[rule_type]
        except KeyError:
            continue
    raise TypeError('No handler for rule %r' % (rule,))


class ModuleState(object):
    """Scratch state of a single evaluation, frozen into a ResolvedModule."""

    def __init__(self, descriptor):
        super(ModuleState, self).__init__()
        self.name = descriptor.name

        # dicts are used as insertion-ordered sets
        self.public = dict.fromkeys(descriptor.public_dependencies)
        self.private = dict.fromkeys(name
                                     for name in descriptor.private_dependencies
                                     if name not in self.public)
        self.definitions = {}

    def add_public(self, name):
        self.private.pop(name, None)
        self.public[name] = None

    def add_private(self, name):
        # public visibility covers private use
        if name not in self.public:
            self.private[name] = None

    def define(self, name, value):
        prev = self.definitions.get(name)
        if name in self.definitions and prev != value:
            logger.debug("%s: %s redefined from %r to %r",
                         self.name, name, prev, value)
        self.definitions[name] = value

    def freeze(self):
        return ResolvedModule(self.name, self.public, self.private,
                              self.definitions)


def probe_exists(inventory, module_name):
    """Asks the inventory whether a module exists.

    Returns True or False. Anything else the inventory does (raising,
    answering with a non-bool) is reported as InventoryProbeFailure.
    """
    probe = getattr(inventory, 'probe', None)
    try:
        if probe is not None:
            return probe(module_name).exists
        result = inventory.exists(module_name)
    except InventoryProbeFailure:
        raise
    except Exception as e:
        raise InventoryProbeFailure(module_name, e) from e

    if not isinstance(result, bool):
        raise InventoryProbeFailure(module_name, TypeError(
            'exists() returned %r instead of a bool' % (result,)))
    return result


@rule_handler(EditorOnlyDependency)
def apply_editor_only(rule, state, target, inventory):
    if target.is_editor_build:
        for name in rule.target_names:
            state.add_private(name)


@rule_handler(DeveloperToolsFeature)
def apply_developer_tools(rule, state, target, inventory):
    enabled = target.developer_tools_enabled
    state.define(rule.definition_name, enabled)
    if enabled:
        state.add_public(rule.dependency_name)


@rule_handler(OptionalModuleFeature)
def apply_optional_module(rule, state, target, inventory):
    state.define(rule.definition_name,
                 probe_exists(inventory, rule.probed_module_name))


@rule_handler(Definition)
def apply_definition(rule, state, target, inventory):
    state.define(rule.definition_name, rule.value)


@rule_handler(CapabilityDependency)
def apply_capability(rule, state, target, inventory):
    if target.has_capability(rule.capability):
        for name in rule.target_names:
            state.add_private(name)


def evaluate(descriptor, target, inventory):
    """Applies the descriptor rules in order. Returns a ResolvedModule."""
    state = ModuleState(descriptor)

    for rule in descriptor.rules:
        _handler_for(rule)(rule, state, target, inventory)

    resolved = state.freeze()
    logger.debug("evaluated %s: public=%s private=%s definitions=%s",
                 resolved.name, sorted(resolved.public_dependencies),
                 sorted(resolved.private_dependencies),
                 sorted(resolved.definitions.items()))
    return resolved


def evaluate_all(descriptors, target, inventory, jobs=None):
    """Evaluates a batch of descriptors, optionally on a thread pool.

    Results are returned in the order of descriptors. The error of the first
    failed descriptor (in that order) is re-raised, and evaluations not
    started yet are cancelled.
    """
    descriptors = list(descriptors)

    if not jobs or jobs <= 1 or len(descriptors) <= 1:
        return [evaluate(descriptor, target, inventory)
                for descriptor in descriptors]

    with ThreadPoolExecutor(max_workers=jobs) as executor:
        futures = [executor.submit(evaluate, descriptor, target, inventory)
                   for descriptor in descriptors]
        try:
            return [future.result() for future in futures]
        except BaseException:
            for future in futures:
                future.cancel()
            raise
