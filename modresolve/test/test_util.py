"""
Tests for logging helpers.
"""

import logging
import unittest
from unittest import TestCase

from modresolve import util
from modresolve.core import ModuleDescriptor
from modresolve.core import TargetEnvironment
from modresolve.core import define
from modresolve.inventory import StaticInventory
from modresolve.resolver import resolve


class RecordingHandler(logging.Handler):

    def __init__(self):
        super(RecordingHandler, self).__init__(logging.DEBUG)
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


class ExtendedLoggerTestCase(TestCase):

    def setUp(self):
        self.handler = RecordingHandler()
        self.logger = util.get_extended_logger('modresolve.test.util')
        self.logger.addHandler(self.handler)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        descriptors = [
            ModuleDescriptor('Game', ['Engine'], ['Slate'],
                             [define('GAME_NAME', 'Lyra')]),
            ModuleDescriptor('Engine'),
            ModuleDescriptor('Slate'),
        ]
        self.plan = resolve('Game', TargetEnvironment(), StaticInventory(),
                            descriptors)

    def tearDown(self):
        self.logger.removeHandler(self.handler)

    def test_dump_plan(self):
        self.logger.dump(self.plan)
        messages = self.handler.messages
        self.assertEqual('build order (3): Engine Slate Game', messages[0])
        self.assertIn('\tGame', messages)
        self.assertIn('\t\tpublic: Engine', messages)
        self.assertIn('\t\tprivate:Slate', messages)
        self.assertIn('\t\tdefines:GAME_NAME=Lyra', messages)
        # modules with no edges or definitions get a single line
        self.assertEqual(messages.index('\tSlate') + 1,
                         messages.index('\tGame'))

    def test_dump_disabled(self):
        self.logger.setLevel(logging.INFO)
        self.logger.dump(self.plan)
        self.assertEqual([], self.handler.messages)

    def test_traced(self):
        @self.logger.traced
        def work(x):
            return x * 2

        self.assertEqual(4, work(2))
        self.assertEqual('work', work.__name__)
        self.assertEqual(['>>> work', '<<< work'], self.handler.messages)

    def test_traced_failure(self):
        @self.logger.traced
        def work():
            raise ValueError('boom')

        with self.assertRaises(ValueError):
            work()
        self.assertEqual(['>>> work', '<<< work failed: boom'],
                         self.handler.messages)


if __name__ == '__main__':
    unittest.main()
