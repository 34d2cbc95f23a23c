"""
Tests for dependency graph validation and ordering.
"""

import unittest
from unittest import TestCase

from modresolve.core import ResolvedModule
from modresolve.errors import CyclicDependency
from modresolve.errors import UnknownModuleReference
from modresolve.graph import *


def pool(**deps):
    """pool(A='B C', B='') -> {name: ResolvedModule}, all deps private."""
    return dict((name, ResolvedModule(name, (), names.split()))
                for name, names in deps.items())


class GraphBuilderTestCase(TestCase):

    def assertOrderConsistent(self, graph):
        position = dict((name, i) for i, name in enumerate(graph.order))
        for name in graph.nodes:
            for dep in graph.dependencies(name):
                self.assertLess(position[dep], position[name],
                                '%s must precede %s' % (dep, name))

    def test_chain(self):
        graph = build_graph(['A'], pool(A='B', B='C', C=''))
        self.assertEqual(('C', 'B', 'A'), graph.order)
        self.assertOrderConsistent(graph)

    def test_lexical_ties(self):
        graph = build_graph(['Top'], pool(Top='Zed Alpha Mid', Zed='',
                                          Alpha='', Mid=''))
        self.assertEqual(('Alpha', 'Mid', 'Zed', 'Top'), graph.order)

    def test_diamond(self):
        graph = build_graph(['A'], pool(A='B C', B='D', C='D', D=''))
        self.assertEqual(('D', 'B', 'C', 'A'), graph.order)
        self.assertOrderConsistent(graph)
        self.assertEqual(('B', 'C'), graph.dependents('D'))
        self.assertEqual((), graph.dependents('A'))
        self.assertEqual(('B', 'C'), graph.dependencies('A'))

    def test_unreachable_modules_are_dropped(self):
        graph = build_graph(['A'], pool(A='B', B='', Unused='A'))
        self.assertEqual({'A', 'B'}, graph.nodes)
        self.assertNotIn('Unused', graph)
        self.assertEqual(2, len(graph))

    def test_several_roots(self):
        graph = build_graph(['B', 'A'], pool(A='C', B='C', C=''))
        self.assertEqual(('C', 'A', 'B'), graph.order)
        self.assertEqual(['C', 'A', 'B'], list(graph))

    def test_public_and_private_edges(self):
        modules = {
            'A': ResolvedModule('A', ['B'], ['C']),
            'B': ResolvedModule('B'),
            'C': ResolvedModule('C', ['B']),
        }
        graph = build_graph(['A'], modules)
        self.assertEqual(('B', 'C', 'A'), graph.order)
        self.assertOrderConsistent(graph)

    def test_iterable_pool(self):
        graph = build_graph(['A'], pool(A='B', B='').values())
        self.assertEqual(('B', 'A'), graph.order)

    def test_cycle(self):
        with self.assertRaises(CyclicDependency) as cm:
            build_graph(['A'], pool(A='B', B='A'))
        self.assertEqual(('A', 'B', 'A'), cm.exception.cycle_path)
        self.assertEqual('dependency cycle: A -> B -> A',
                         str(cm.exception))

    def test_cycle_below_root(self):
        with self.assertRaises(CyclicDependency) as cm:
            build_graph(['Root'], pool(Root='X', X='Y', Y='Z', Z='X'))
        path = cm.exception.cycle_path
        self.assertEqual(path[0], path[-1])
        self.assertEqual(('X', 'Y', 'Z', 'X'), path)

    def test_unknown_reference(self):
        with self.assertRaises(UnknownModuleReference) as cm:
            build_graph(['A'], pool(A='B', B='Zeta'))
        self.assertEqual('B', cm.exception.referencing_module)
        self.assertEqual('Zeta', cm.exception.missing_name)

    def test_unknown_root(self):
        with self.assertRaises(UnknownModuleReference) as cm:
            build_graph(['Nope'], pool(A=''))
        self.assertIsNone(cm.exception.referencing_module)
        self.assertEqual('Nope', cm.exception.missing_name)

    def test_unknown_reference_wins_over_cycle(self):
        with self.assertRaises(UnknownModuleReference):
            build_graph(['A'], pool(A='B', B='A Zeta'))

    def test_deterministic(self):
        modules = pool(A='D C B', B='E', C='E', D='E', E='')
        orders = set(build_graph(['A'], modules).order for _ in range(5))
        self.assertEqual(1, len(orders))


if __name__ == '__main__':
    unittest.main()
