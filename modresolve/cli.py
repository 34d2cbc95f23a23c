"""
Command line front-end.

    modresolve -C Source -c Shipping --editor OUUDeveloper
"""

import argparse
import logging
import sys

from modresolve import __version__
from modresolve import util
from modresolve.config import DEFAULT_TARGET
from modresolve.config import capability_names
from modresolve.config import load_target_mapping
from modresolve.config import target_from_mapping
from modresolve.core import CONFIGURATIONS
from modresolve.errors import ModresolveError
from modresolve.inventory import SourceTreeInventory
from modresolve.inventory import StaticInventory
from modresolve.loader import load_file
from modresolve.loader import load_tree
from modresolve.loader.errors import LoaderError
from modresolve.resolver import Resolver

logger = logging.getLogger(__name__)


EXIT_OK = 0
EXIT_FAILURE = 1


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='modresolve',
        description='Resolve module dependencies and compile definitions '
                    'for a target build environment.')

    parser.add_argument('modules', nargs='+', metavar='MODULE',
                        help='modules to build')

    source = parser.add_argument_group('descriptors')
    source.add_argument('-C', '--source-dir', action='append', default=[],
                        dest='source_dirs', metavar='DIR',
                        help='source tree to scan for rules files; modules '
                             'found there also make up the inventory '
                             '(repeatable)')
    source.add_argument('-f', '--file', action='append', default=[],
                        dest='files', metavar='FILE',
                        help='extra rules file to load (repeatable)')

    target = parser.add_argument_group('target environment')
    target.add_argument('-t', '--target', metavar='FILE',
                        help='YAML file with target settings')
    target.add_argument('-c', '--configuration', choices=CONFIGURATIONS,
                        help='configuration tier (default: %s)'
                             % DEFAULT_TARGET.configuration)
    target.add_argument('--editor', dest='editor', action='store_true',
                        default=None, help='editor build')
    target.add_argument('--no-editor', dest='editor', action='store_false')
    target.add_argument('--developer-tools', dest='developer_tools',
                        action='store_true', default=None,
                        help='build developer tools')
    target.add_argument('--no-developer-tools', dest='developer_tools',
                        action='store_false')
    target.add_argument('--engine-version', metavar='VERSION')
    target.add_argument('--capability', action='append', default=[],
                        dest='capabilities', metavar='NAME',
                        help='grant a capability flag (repeatable)')

    parser.add_argument('-j', '--jobs', type=int, default=None,
                        help='evaluate descriptors on that many threads')
    parser.add_argument('--format', choices=('yaml', 'order', 'definitions'),
                        default='yaml', help='output format (default: yaml)')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='increase logging verbosity')
    parser.add_argument('--log-file', metavar='FILE',
                        help='write a debug log into a file')
    parser.add_argument('--version', action='version',
                        version='%(prog)s ' + __version__)

    args = parser.parse_args(argv)

    if not args.source_dirs and not args.files:
        parser.error('at least one of --source-dir or --file is required')
    if args.jobs is not None and args.jobs < 1:
        parser.error('--jobs must be positive')

    return args


def init_logging(args):
    if args.log_file:
        util.init_logging(args.log_file)
    else:
        level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose,
                                                           logging.DEBUG)
        util.init_logging(sys.stderr, level=level)


def make_target(args):
    overrides = dict(configuration=args.configuration,
                     is_editor_build=args.editor,
                     build_developer_tools=args.developer_tools,
                     engine_version=args.engine_version)

    mapping = dict(load_target_mapping(args.target)) if args.target else {}

    # applied once, so the version table sees the overridden engine_version
    if args.capabilities:
        mapping['capabilities'] = (capability_names(mapping.get('capabilities'))
                                   + args.capabilities)

    return target_from_mapping(mapping, **overrides)


def load_descriptors(args):
    descriptors = load_tree(args.source_dirs) if args.source_dirs else []
    for path in args.files:
        descriptors.extend(load_file(path))
    return descriptors


def make_inventory(args, descriptors):
    if args.source_dirs:
        return SourceTreeInventory(args.source_dirs)
    return StaticInventory.from_descriptors(descriptors)


def write_plan(plan, fmt, stream):
    if fmt == 'yaml':
        plan.dump(stream)
    elif fmt == 'order':
        for name in plan.order:
            stream.write(name + '\n')
    else:
        for name in plan.order:
            line = [name + ':'] + plan.compile_definitions(name)
            stream.write(' '.join(line) + '\n')


def main(argv=None, stdout=None, stderr=None):
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    args = parse_args(argv)
    init_logging(args)

    try:
        target = make_target(args)
        descriptors = load_descriptors(args)
        inventory = make_inventory(args, descriptors)

        logger.info("%d module(s) declared, target: %r",
                    len(descriptors), target)

        plan = Resolver(descriptors, jobs=args.jobs).resolve(
            args.modules, target, inventory)

    except (ModresolveError, LoaderError) as e:
        stderr.write('modresolve: error: %s\n' % e)
        return EXIT_FAILURE

    write_plan(plan, args.format, stdout)
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
