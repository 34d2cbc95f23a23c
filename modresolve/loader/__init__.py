"""
Loaders of module descriptors from declarative files.

Each loader is registered for an exact file name (e.g. 'Modrules') and is a
callable accepting a path and returning a list of ModuleDescriptor objects.
A source tree is a set of module directories, each holding one rules file:

    Source/
        Core/Modrules
        Engine/Modrules.yaml
"""

__all__ = [
    "registered_loaders",
    "loader_for",
    "loader_filenames",
    "load_file",
    "find_rule_files",
    "load_tree",
]


import os

from modresolve.loader.errors import LoaderError
from modresolve.loader.errors import UnknownFileTypeError

import logging
logger = logging.getLogger(__name__)


registered_loaders = dict()


def loader_for(filename):
    """Deco-maker for registering loaders."""

    def decorator(loader):
        if filename in registered_loaders:
            prev = registered_loaders[filename]
            raise ValueError("Loader for '{filename}' is already registered "
                             "{prev}".format(**locals()))

        registered_loaders[filename] = loader

        return loader

    return decorator


def loader_filenames():
    return sorted(registered_loaders)


def load_file(path):
    """Loads descriptors from a single file choosing a loader by its name."""
    try:
        loader = registered_loaders[os.path.basename(path)]
    except KeyError:
        raise UnknownFileTypeError(path)

    logger.debug("loading %s", path)
    return list(loader(path))


def find_rule_files(roots):
    """Yields paths of all rules files under the roots, in a stable order."""
    if isinstance(roots, str):
        roots = [roots]

    for root in roots:
        if not os.path.isdir(root):
            raise LoaderError("Not a directory: '%s'" % root)

        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for filename in sorted(filenames):
                if filename in registered_loaders:
                    yield os.path.join(dirpath, filename)


def load_tree(roots):
    """Loads descriptors from all rules files found under the roots."""
    descriptors = []
    for path in find_rule_files(roots):
        descriptors.extend(load_file(path))
    return descriptors


# Register built-in loaders.
from modresolve.loader import modfile
from modresolve.loader import yamlfile
