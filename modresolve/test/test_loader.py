"""
Tests for Modrules and YAML descriptor loaders.
"""

import io
import os
import shutil
import tempfile
import textwrap
import unittest
from unittest import TestCase

from modresolve.core import *
from modresolve.loader import *
from modresolve.loader.errors import *
from modresolve.loader.modfile.parse import parse
from modresolve.loader.yamlfile import load_yaml


MODRULES = textwrap.dedent('''\
    /* Developer-only utilities. */
    module OUUDeveloper {
        public: [Core, CoreUObject, Engine, OUURuntime],
        private: [Slate],
        rules: [
            editor_only(UnrealEd),            // editor builds only
            gameplay_debugger(),
            optional_module("WITH_FOO", Foo),
            define("OUU_DEVELOPER_API_VERSION", 2),
            with_capability("live_coding", [LiveCoding, HotReload]),
        ],
    }

    module OUURuntime {
        public: Engine
    }
    ''')

MODRULES_YAML = textwrap.dedent('''\
    --- !module
    name: OUUDeveloper
    public: [Core, CoreUObject, Engine, OUURuntime]
    private: [Slate]
    rules:
      - !editor_only [UnrealEd]
      - !gameplay_debugger
      - !optional_module {definition: WITH_FOO, module: Foo}
      - !define {name: OUU_DEVELOPER_API_VERSION, value: 2}
      - !with_capability {capability: live_coding,
                          modules: [LiveCoding, HotReload]}
    --- !module
    name: OUURuntime
    public: Engine
    ''')

EXPECTED = [
    ModuleDescriptor('OUUDeveloper',
                     ['Core', 'CoreUObject', 'Engine', 'OUURuntime'],
                     ['Slate'],
                     [editor_only('UnrealEd'),
                      gameplay_debugger(),
                      optional_module('WITH_FOO', 'Foo'),
                      define('OUU_DEVELOPER_API_VERSION', '2'),
                      with_capability('live_coding', 'LiveCoding',
                                      'HotReload')]),
    ModuleDescriptor('OUURuntime', ['Engine']),
]


class ModfileParserTestCase(TestCase):

    def test_parse(self):
        self.assertEqual(EXPECTED, parse(MODRULES, 'Modrules'))

    def test_locations(self):
        descriptors = parse(MODRULES, 'Source/Modrules')
        self.assertEqual(('Source/Modrules', 2), tuple(descriptors[0].location))
        self.assertEqual(('Source/Modrules', 14), tuple(descriptors[1].location))

    def test_empty(self):
        self.assertEqual([], parse(''))
        self.assertEqual([], parse('// nothing here\n'))

    def test_minimal(self):
        self.assertEqual([ModuleDescriptor('A')], parse('module A {}'))
        self.assertEqual([ModuleDescriptor('A.B', ['C'])],
                         parse('module "A.B" { public: C, }'))

    def test_booleans(self):
        [d] = parse('module A { rules: [define(WITH_X, false)] }')
        self.assertEqual((define('WITH_X', False),), d.rules)

    def test_syntax_error_location(self):
        with self.assertRaises(ParseError) as cm:
            parse('module A {\n    public: [B C]\n}\n', 'Modrules')
        self.assertEqual(2, cm.exception.lineno)
        self.assertEqual('Modrules', cm.exception.filename)
        self.assertIsInstance(cm.exception, SyntaxError)

    def test_illegal_character(self):
        with self.assertRaises(ParseError) as cm:
            parse('module A {\n\n  public: [B] ; }')
        self.assertEqual(3, cm.exception.lineno)

    def test_unexpected_end(self):
        with self.assertRaises(ParseError):
            parse('module A {\n  public: [B],\n')

    def test_unknown_rule(self):
        with self.assertRaises(DeclarationError) as cm:
            parse('module A {\n  rules: [\n    sometimes(B)\n  ]\n}')
        self.assertEqual(3, cm.exception.lineno)

    def test_unknown_member(self):
        with self.assertRaises(DeclarationError):
            parse('module A { protected: [B] }')

    def test_repeated_member(self):
        with self.assertRaises(DeclarationError):
            parse('module A { public: B, public: C }')

    def test_bad_rule_arguments(self):
        with self.assertRaises(DeclarationError):
            parse('module A { rules: [optional_module(WITH_FOO)] }')
        with self.assertRaises(DeclarationError):
            parse('module A { rules: [gameplay_debugger(X)] }')
        with self.assertRaises(DeclarationError):
            parse('module A { rules: [B] }')

    def test_self_dependency(self):
        with self.assertRaises(DeclarationError):
            parse('module A { private: [A] }')


class YamlLoaderTestCase(TestCase):

    def test_load(self):
        self.assertEqual(EXPECTED, load_yaml(MODRULES_YAML))

    def test_same_as_modfile(self):
        self.assertEqual(parse(MODRULES), load_yaml(io.StringIO(MODRULES_YAML)))

    def test_list_document(self):
        descriptors = load_yaml(textwrap.dedent('''\
            - !module {name: A, public: [B]}
            - !module {name: B}
            '''))
        self.assertEqual([ModuleDescriptor('A', ['B']), ModuleDescriptor('B')],
                         descriptors)

    def test_define_defaults_to_true(self):
        [d] = load_yaml('!module {name: A, rules: [!define {name: WITH_X}]}')
        self.assertEqual((define('WITH_X', True),), d.rules)

    def test_not_a_module(self):
        with self.assertRaises(YamlFileError):
            load_yaml('name: A\n')

    def test_unknown_field(self):
        with self.assertRaises(YamlFileError) as cm:
            load_yaml('!module {name: A, protected: [B]}')
        self.assertIn('protected', str(cm.exception))

    def test_missing_field(self):
        with self.assertRaises(YamlFileError):
            load_yaml('!module {name: A, rules: [!optional_module '
                      '{definition: WITH_FOO}]}')

    def test_unknown_tag(self):
        with self.assertRaises(YamlFileError):
            load_yaml('!module {name: A, rules: [!sometimes [B]]}')

    def test_invalid_yaml(self):
        with self.assertRaises(YamlFileError):
            load_yaml('!module {name: A, public: [B}')

    def test_unsafe_tags_rejected(self):
        with self.assertRaises(YamlFileError):
            load_yaml('!!python/object/apply:os.system [echo]')


class TreeLoaderTestCase(TestCase):

    def setUp(self):
        self.root = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.root)

    def write(self, relpath, text):
        path = os.path.join(self.root, relpath)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w') as f:
            f.write(text)
        return path

    def test_registered_loaders(self):
        self.assertEqual(['Modrules', 'Modrules.yaml'], loader_filenames())

    def test_load_file(self):
        path = self.write('Engine/Modrules.yaml', '!module {name: Engine}\n')
        self.assertEqual([ModuleDescriptor('Engine')], load_file(path))

    def test_unknown_file_type(self):
        path = self.write('Engine/Build.cs', '')
        with self.assertRaises(UnknownFileTypeError):
            load_file(path)

    def test_missing_file(self):
        with self.assertRaises(LoaderError):
            load_file(os.path.join(self.root, 'Nope', 'Modrules'))

    def test_load_tree(self):
        self.write('Runtime/Engine/Modrules', 'module Engine { public: Core }')
        self.write('Runtime/Core/Modrules', 'module Core {}')
        self.write('Editor/UnrealEd/Modrules.yaml',
                   '!module {name: UnrealEd, public: [Engine]}\n')
        self.write('Editor/UnrealEd/README', 'not a rules file')

        self.assertEqual(
            [os.path.join(self.root, 'Editor', 'UnrealEd', 'Modrules.yaml'),
             os.path.join(self.root, 'Runtime', 'Core', 'Modrules'),
             os.path.join(self.root, 'Runtime', 'Engine', 'Modrules')],
            list(find_rule_files(self.root)))

        self.assertEqual(['UnrealEd', 'Core', 'Engine'],
                         [d.name for d in load_tree([self.root])])

    def test_load_tree_error_location(self):
        path = self.write('Core/Modrules', 'module Core {\n  public: [\n')
        with self.assertRaises(ParseError) as cm:
            load_tree(self.root)
        self.assertEqual(path, cm.exception.filename)

    def test_not_a_directory(self):
        with self.assertRaises(LoaderError):
            list(find_rule_files(os.path.join(self.root, 'Nope')))


if __name__ == '__main__':
    unittest.main()
