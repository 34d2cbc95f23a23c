"""
Build plan: the final output of a resolution pass.

The plan is a plain value. It keeps no reference to the inventory or target
environment used to produce it.
"""

__all__ = [
    "PlannedModule",
    "BuildPlan",
    "format_definition",
]


from collections import OrderedDict
from collections import deque
from collections import namedtuple
from types import MappingProxyType

import yaml


def format_definition(name, value):
    """Renders a definition as a compiler symbol: NAME=1, NAME=0, NAME=text."""
    if isinstance(value, bool):
        value = int(value)
    return '{0}={1}'.format(name, value)


class PlannedModule(namedtuple('PlannedModule',
                               'name public_dependencies '
                               'private_dependencies definitions')):
    """Resolved module with its sets flattened into sorted tuples."""
    __slots__ = ()

    @classmethod
    def from_resolved(cls, resolved):
        return cls(resolved.name,
                   tuple(sorted(resolved.public_dependencies)),
                   tuple(sorted(resolved.private_dependencies)),
                   tuple(sorted(resolved.definitions.items())))

    @property
    def dependencies(self):
        return tuple(sorted(self.public_dependencies +
                            self.private_dependencies))


class BuildPlan(object):
    """Topologically ordered modules with their edges and definitions."""

    def __init__(self, order, modules):
        super(BuildPlan, self).__init__()

        modules = dict((module.name, module) for module in modules)
        if set(order) != set(modules):
            raise ValueError('Order does not match the set of modules')

        self._order = tuple(order)
        self._modules = MappingProxyType(OrderedDict(
            (name, modules[name]) for name in self._order))

    @classmethod
    def from_graph(cls, graph):
        return cls(graph.order,
                   (PlannedModule.from_resolved(module)
                    for module in graph.modules.values()))

    @property
    def order(self):
        return self._order

    @property
    def modules(self):
        return self._modules

    def __getitem__(self, name):
        return self._modules[name]

    def __contains__(self, name):
        return name in self._modules

    def __iter__(self):
        return iter(self._order)

    def __len__(self):
        return len(self._order)

    def public_dependencies(self, name):
        return self._modules[name].public_dependencies

    def private_dependencies(self, name):
        return self._modules[name].private_dependencies

    def dependencies(self, name):
        return self._modules[name].dependencies

    def definitions(self, name):
        return dict(self._modules[name].definitions)

    def compile_definitions(self, name):
        return [format_definition(key, value)
                for key, value in self._modules[name].definitions]

    def visible_modules(self, name):
        """Modules whose interface the given module can see.

        Those are the direct dependencies plus, transitively, public
        dependencies of every visible module.
        """
        direct = self._modules[name].dependencies
        visible = set(direct)
        queue = deque(direct)

        while queue:
            for dep in self._modules[queue.popleft()].public_dependencies:
                if dep not in visible and dep != name:
                    visible.add(dep)
                    queue.append(dep)

        return tuple(sorted(visible))

    def as_dict(self):
        return OrderedDict([
            ('order', list(self._order)),
            ('modules', OrderedDict(
                (name, OrderedDict([
                    ('public', list(module.public_dependencies)),
                    ('private', list(module.private_dependencies)),
                    ('definitions', OrderedDict(module.definitions)),
                ])) for name, module in self._modules.items())),
        ])

    def dump(self, stream=None):
        """Serializes the plan into YAML. Returns a string if no stream given.
        """
        return yaml.dump(_to_plain(self.as_dict()), stream,
                         Dumper=yaml.SafeDumper, default_flow_style=False,
                         sort_keys=False)

    def __eq__(self, other):
        if not isinstance(other, BuildPlan):
            return NotImplemented
        return (self._order == other._order and
                dict(self._modules) == dict(other._modules))

    def __ne__(self, other):
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    __hash__ = None

    def __repr__(self):
        return '<{cls}: {order}>'.format(cls=type(self).__name__,
                                         order=list(self._order))


def _to_plain(obj):
    # SafeDumper does not know OrderedDict
    if isinstance(obj, dict):
        return dict((key, _to_plain(value)) for key, value in obj.items())
    if isinstance(obj, list):
        return [_to_plain(value) for value in obj]
    return obj
