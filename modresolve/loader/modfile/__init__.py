"""
Loader for plain Modrules files.
"""

import io

from modresolve.loader import loader_for
from modresolve.loader.errors import LoaderError
from modresolve.loader.modfile.parse import parse


FILENAME = 'Modrules'


@loader_for(FILENAME)
def load_modfile(path):
    try:
        with io.open(path, encoding='utf-8') as f:
            text = f.read()
    except (IOError, UnicodeDecodeError) as e:
        raise LoaderError("Error while reading '%s': %s" % (path, e))

    return parse(text, filename=path)
