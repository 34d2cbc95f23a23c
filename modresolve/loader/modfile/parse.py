"""
PLY-based parser for Modrules grammar.

A Modrules file holds one or more module declarations:

    /* Developer-only utilities. */
    module OUUDeveloper {
        public: [Core, CoreUObject, Engine, OUURuntime],
        private: [Slate, AIModule],
        rules: [
            editor_only(UnrealEd),
            gameplay_debugger(),
            optional_module("WITH_FOO", Foo),
            define("OUU_DEVELOPER_API_VERSION", "2"),
            with_capability("live_coding", LiveCoding),
        ],
    }

Module names are either identifiers (possibly dotted) or string literals.
"""

import threading

import ply.yacc

from modresolve.core import ModuleDescriptor
from modresolve.core import define
from modresolve.core import developer_tools
from modresolve.core import editor_only
from modresolve.core import gameplay_debugger
from modresolve.core import optional_module
from modresolve.core import with_capability
from modresolve.errors import DescriptorError
from modresolve.loader.errors import DeclarationError
from modresolve.loader.errors import ParseError
from modresolve.loader.location import Fileinfo
from modresolve.loader.location import Location
from modresolve.loader.modfile import lex


class Call(object):
    """Rule call as written in a file: name(args...)."""
    __slots__ = 'name', 'args', 'loc'

    def __init__(self, name, args, loc):
        super(Call, self).__init__()
        self.name = name
        self.args = args
        self.loc  = loc

    def __repr__(self):
        return '{0}({1})'.format(self.name, ', '.join(map(repr, self.args)))


def _flatten(args):
    for arg in args:
        if isinstance(arg, list):
            for item in arg:
                yield item
        else:
            yield arg

def _name_list_rule(func):
    def make_rule(*args):
        return func(*_flatten(args))
    return make_rule

def _capability_rule(capability, *args):
    return with_capability(capability, *_flatten(args))

def _define_rule(name, value=True):
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    return define(name, value)


rule_constructors = {
    'editor_only':       _name_list_rule(editor_only),
    'developer_tools':   developer_tools,
    'optional_module':   optional_module,
    'define':            _define_rule,
    'with_capability':   _capability_rule,
    'gameplay_debugger': gameplay_debugger,
}


# Here go semantic actions.

def to_rlist(reversed_list):
    return reversed_list[::-1]


def ploc(p, i=1):
    return Location(p.lexer.fileinfo, p.lineno(i), p.lexpos(i))


def _names(value, key, loc):
    if not isinstance(value, list):
        value = [value]
    for name in value:
        if not isinstance(name, str):
            raise DeclarationError("'%s' must list module names, got %r"
                                   % (key, name), loc)
    return value

def _rules(value, loc):
    if not isinstance(value, list):
        value = [value]

    rules = []
    for call in value:
        if not isinstance(call, Call):
            raise DeclarationError("'rules' must list rule calls, got %r"
                                   % (call,), loc)
        try:
            constructor = rule_constructors[call.name]
        except KeyError:
            raise DeclarationError("Unknown rule '%s', expected one of: %s"
                                   % (call.name,
                                      ', '.join(sorted(rule_constructors))),
                                   call.loc)
        try:
            rules.append(constructor(*call.args))
        except (TypeError, DescriptorError) as e:
            raise DeclarationError("Invalid rule %r: %s" % (call, e),
                                   call.loc)

    return rules


def build_descriptor(name, members, loc):
    kwargs = {}
    member_kwargs = {
        'public':  'public_dependencies',
        'private': 'private_dependencies',
        'rules':   'rules',
    }

    for key, value, member_loc in members:
        try:
            kwarg = member_kwargs[key]
        except KeyError:
            raise DeclarationError("Unknown member '%s' of module '%s'"
                                   % (key, name), member_loc)
        if kwarg in kwargs:
            raise DeclarationError("Repeated member '%s' of module '%s'"
                                   % (key, name), member_loc)

        if kwarg == 'rules':
            kwargs[kwarg] = _rules(value, member_loc)
        else:
            kwargs[kwarg] = _names(value, key, member_loc)

    try:
        return ModuleDescriptor(name, location=loc, **kwargs)
    except DescriptorError as e:
        raise DeclarationError(str(e), loc)


# Grammar definitions for PLY.

tokens = lex.tokens
start = 'translation_unit'


def p_translation_unit(p):
    """translation_unit : modules"""
    p[0] = to_rlist(p[1])


def p_modules_0(p):
    """modules :"""
    p[0] = []
def p_modules_1(p):
    """modules : module modules"""
    l = p[0] = p[2]
    l.append(p[1])


def p_module(p):
    """module : MODULE module_name LBRACE members RBRACE"""
    p[0] = build_descriptor(p[2], to_rlist(p[4]), ploc(p, 1))


def p_module_name(p):
    """module_name : qualname
       module_name : STRING"""
    p[0] = p[1]


def p_members_0(p):
    """members :
       members : member"""
    p[0] = [p[1]] if len(p) > 1 else []
def p_members_1(p):
    """members : member COMMA members"""
    l = p[0] = p[3]
    l.append(p[1])

def p_member(p):
    """member : ID COLON value"""
    p[0] = (p[1], p[3], ploc(p, 1))


def p_value_0(p):
    """value : STRING
       value : NUMBER
       value : qualname
       value : call
       value : array"""
    p[0] = p[1]

def p_value_1(p):
    """value : TRUE
       value : FALSE"""
    p[0] = (p[1] == 'true')


def p_call(p):
    """call : ID LPAREN values RPAREN"""
    p[0] = Call(p[1], to_rlist(p[3]), ploc(p, 1))


def p_array(p):
    """array : LBRACKET values RBRACKET"""
    p[0] = to_rlist(p[2])


def p_values_0(p):
    """values :
       values : value"""
    p[0] = [p[1]] if len(p) > 1 else []
def p_values_1(p):
    """values : value COMMA values"""
    l = p[0] = p[3]
    l.append(p[1])


def p_qualname_0(p):
    """qualname : ID"""
    p[0] = p[1]
def p_qualname_1(p):
    """qualname : ID PERIOD qualname"""
    p[0] = p[1] + '.' + p[3]


def p_error(t):
    if t is None:
        raise ParseError("Unexpected end of file", Location.at_end(
            parser.fileinfo))
    raise ParseError("Unexpected {0!r}".format(t.value), lex.loc(t))


parser = ply.yacc.yacc(method='LALR', write_tables=False, debug=False)
_parse_lock = threading.Lock()


# The main entry point.

def parse(text, filename=None, **kwargs):
    """
    Parses the given text and returns a list of ModuleDescriptor objects.

    Args:
        text (str) - data to parse
        filename (str) - file name to report in case of errors
        **kwargs are passed directly to the underlying PLY parser

    Raises:
        ParseError, DeclarationError (both are SyntaxError subclasses).
    """
    with _parse_lock:
        fileinfo = Fileinfo(text, filename)

        lexer = lex.lexer.clone()
        lexer.lineno = 1
        lexer.fileinfo = parser.fileinfo = fileinfo

        return parser.parse(text, lexer=lexer, **kwargs)
