"""
Dependency graph of resolved modules.
"""

__all__ = [
    "DependencyGraph",
    "GraphBuilder",
    "build_graph",
]


from collections import deque
from types import MappingProxyType

from modresolve.errors import CyclicDependency
from modresolve.errors import UnknownModuleReference

import logging
logger = logging.getLogger(__name__)


# DFS marks
UNVISITED, IN_PROGRESS, DONE = range(3)


class DependencyGraph(object):
    """Validated acyclic graph. Edges go from a dependent to a dependency."""

    def __init__(self, modules, order):
        super(DependencyGraph, self).__init__()
        self._modules = MappingProxyType(dict(modules))
        self._order = tuple(order)

        dependents = dict((name, set()) for name in self._modules)
        for name, module in self._modules.items():
            for dep in module.dependencies:
                dependents[dep].add(name)
        self._dependents = dict((name, tuple(sorted(names)))
                                for name, names in dependents.items())

    @property
    def modules(self):
        return self._modules

    @property
    def nodes(self):
        return frozenset(self._modules)

    @property
    def order(self):
        """Dependencies come before their dependents."""
        return self._order

    def dependencies(self, name):
        return tuple(sorted(self._modules[name].dependencies))

    def dependents(self, name):
        return self._dependents[name]

    def __contains__(self, name):
        return name in self._modules

    def __len__(self):
        return len(self._modules)

    def __iter__(self):
        return iter(self._order)

    def __repr__(self):
        return '<{cls}: {order}>'.format(cls=type(self).__name__,
                                         order=list(self._order))


class GraphBuilder(object):
    """Builds a DependencyGraph out of a pool of resolved modules.

    Args:
        resolved_modules: a mapping {name: ResolvedModule} or an iterable of
            ResolvedModule objects. Modules unreachable from the roots passed
            to build() are ignored.
    """

    def __init__(self, resolved_modules):
        super(GraphBuilder, self).__init__()
        if hasattr(resolved_modules, 'values'):
            resolved_modules = resolved_modules.values()
        self._pool = dict((module.name, module)
                          for module in resolved_modules)

    def _dependencies_of(self, name):
        return sorted(self._pool[name].dependencies)

    def collect(self, roots):
        """Returns the set of names reachable from the roots.

        Raises UnknownModuleReference on the first name missing from the pool.
        """
        nodes = set()
        queue = deque((None, root) for root in sorted(set(roots)))

        while queue:
            referencing, name = queue.popleft()
            if name in nodes:
                continue
            if name not in self._pool:
                raise UnknownModuleReference(referencing, name)

            nodes.add(name)
            queue.extend((name, dep) for dep in self._dependencies_of(name)
                         if dep not in nodes)

        return nodes

    def sort(self, nodes):
        """Topological sort by a depth-first traversal.

        Nodes and their dependencies are traversed in lexical order, so the
        result is the same across runs. Raises CyclicDependency holding the
        path of the first cycle found, with its first node repeated at the
        end.
        """
        marks = dict.fromkeys(nodes, UNVISITED)
        order = []

        for root in sorted(nodes):
            if marks[root] != UNVISITED:
                continue

            marks[root] = IN_PROGRESS
            path = [root]
            iters = [iter(self._dependencies_of(root))]

            while iters:
                for dep in iters[-1]:
                    mark = marks[dep]
                    if mark == IN_PROGRESS:
                        cycle = path[path.index(dep):] + [dep]
                        logger.debug("cycle detected: %s", cycle)
                        raise CyclicDependency(cycle)
                    if mark == UNVISITED:
                        marks[dep] = IN_PROGRESS
                        path.append(dep)
                        iters.append(iter(self._dependencies_of(dep)))
                        break
                else:
                    iters.pop()
                    done = path.pop()
                    marks[done] = DONE
                    order.append(done)

        return order

    def build(self, roots):
        nodes = self.collect(roots)
        order = self.sort(nodes)
        return DependencyGraph(((name, self._pool[name]) for name in nodes),
                               order)


def build_graph(roots, resolved_modules):
    return GraphBuilder(resolved_modules).build(roots)
