"""
Tests for target environment configuration files.
"""

import os
import shutil
import tempfile
import unittest
from unittest import TestCase

from modresolve.config import *
from modresolve.core import DEVELOPMENT
from modresolve.core import SHIPPING
from modresolve.core import TEST


class TargetFromMappingTestCase(TestCase):

    def test_empty(self):
        self.assertEqual(DEFAULT_TARGET, target_from_mapping(None))
        self.assertEqual(DEFAULT_TARGET, target_from_mapping({}))

    def test_keys(self):
        target = target_from_mapping({
            'configuration': 'Shipping',
            'editor': True,
            'developer_tools': True,
            'engine_version': '5.1',
            'capabilities': 'live_coding',
            'capability_versions': {'world_partition': '5.0'},
        })
        self.assertEqual(SHIPPING, target.configuration)
        self.assertIs(True, target.is_editor_build)
        self.assertIs(True, target.build_developer_tools)
        self.assertEqual((5, 1), target.engine_version)
        self.assertEqual({'live_coding', 'world_partition'},
                         target.capabilities)

    def test_overrides(self):
        target = target_from_mapping({'configuration': 'Shipping'},
                                     configuration=TEST, is_editor_build=None)
        self.assertEqual(TEST, target.configuration)
        self.assertIs(False, target.is_editor_build)

    def test_unknown_key(self):
        with self.assertRaises(ConfigFileError) as cm:
            target_from_mapping({'platform': 'Win64'})
        self.assertIn('platform', str(cm.exception))

    def test_not_a_bool(self):
        with self.assertRaises(ConfigFileError):
            target_from_mapping({'editor': 'yes please'})

    def test_bad_values(self):
        with self.assertRaises(ConfigFileError):
            target_from_mapping({'configuration': 'Release'})
        with self.assertRaises(ConfigFileError):
            target_from_mapping({'engine_version': 'latest'})

    def test_not_a_mapping(self):
        with self.assertRaises(ConfigFileError):
            target_from_mapping(['Shipping'])


class LoadTargetTestCase(TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def write(self, text):
        path = os.path.join(self.tmpdir, 'target.yaml')
        with open(path, 'w') as f:
            f.write(text)
        return path

    def test_load(self):
        path = self.write('configuration: Test\neditor: false\n'
                          'engine_version: "4.27"\n')
        target = load_target(path)
        self.assertEqual(TEST, target.configuration)
        self.assertEqual((4, 27), target.engine_version)

    def test_load_with_overrides(self):
        path = self.write('editor: true\n')
        target = load_target(path, configuration=DEVELOPMENT)
        self.assertIs(True, target.is_editor_build)
        self.assertEqual(DEVELOPMENT, target.configuration)

    def test_load_mapping_is_raw(self):
        path = self.write('engine_version: "4.27"\n'
                          'capability_versions: {live_coding: "5.0"}\n')
        mapping = load_target_mapping(path)
        self.assertEqual({'live_coding': '5.0'},
                         mapping['capability_versions'])

        target = target_from_mapping(mapping, engine_version='5.1')
        self.assertTrue(target.has_capability('live_coding'))

    def test_load_mapping_empty_file(self):
        self.assertEqual({}, load_target_mapping(self.write('')))

    def test_load_mapping_not_a_mapping(self):
        with self.assertRaises(ConfigFileError):
            load_target_mapping(self.write('- Shipping\n'))

    def test_capability_names(self):
        self.assertEqual([], capability_names(None))
        self.assertEqual(['a'], capability_names('a'))
        self.assertEqual(['a', 'b'], capability_names(('a', 'b')))
        with self.assertRaises(ConfigFileError):
            capability_names(5)

    def test_missing_file(self):
        with self.assertRaises(ConfigFileError):
            load_target(os.path.join(self.tmpdir, 'nope.yaml'))

    def test_invalid_yaml(self):
        with self.assertRaises(ConfigFileError):
            load_target(self.write('configuration: [Test\n'))


if __name__ == '__main__':
    unittest.main()
