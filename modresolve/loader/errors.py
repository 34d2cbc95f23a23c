"""
Exceptions raised while loading descriptor files.
"""

__all__ = [
    "LoaderError",
    "UnknownFileTypeError",
    "ModfileError",
    "ParseError",
    "DeclarationError",
    "YamlFileError",
]

import traceback as _traceback


class LoaderError(Exception):

    def print_error(self, tb=None):
        _traceback.print_exception(type(self), self, tb)


class UnknownFileTypeError(LoaderError, ValueError):

    def __init__(self, path):
        super(UnknownFileTypeError, self).__init__(
            "No loader registered for '%s'" % path)
        self.path = path


class ModfileError(LoaderError, SyntaxError):
    """Error at some location of a Modrules file."""

    def __init__(self, message, loc):
        super(ModfileError, self).__init__(message, loc.to_syntax_error_tuple())
        self.loc = loc


class ParseError(ModfileError):
    pass

class DeclarationError(ModfileError):
    """Syntactically correct but meaningless declaration."""


class YamlFileError(LoaderError):

    def __init__(self, message, mark=None):
        if mark is not None:
            message = '%s: line %d, column %d: %s' % (
                mark.name, mark.line + 1, mark.column + 1, message)
        super(YamlFileError, self).__init__(message)
        self.mark = mark
