"""
Lexer definitions for Modrules grammar.
"""

import ply.lex

from modresolve.loader.errors import ParseError
from modresolve.loader.location import Location


def loc(t):
    return Location(t.lexer.fileinfo, t.lineno, t.lexpos)


reserved = {
    'module': 'MODULE',
    'true':   'TRUE',
    'false':  'FALSE',
}

tokens = (
    # Literals (identifier, number, string)
    'ID', 'NUMBER', 'STRING',

    # Delimeters ( ) [ ] { } , . :
    'LPAREN',   'RPAREN',
    'LBRACKET', 'RBRACKET',
    'LBRACE',   'RBRACE',
    'COMMA', 'PERIOD', 'COLON',
) + tuple(reserved.values())

# Completely ignored characters
t_ignore           = ' \t\r\x0c'

# Newlines
def t_newline(t):
    r'\n+'
    t.lexer.lineno += len(t.value)

# Comments
def t_comment(t):
    r'(/\*(.|\n)*?\*/)|(//[^\n]*)'
    t.lexer.lineno += t.value.count('\n')

# Delimeters
t_LPAREN           = r'\('
t_RPAREN           = r'\)'
t_LBRACKET         = r'\['
t_RBRACKET         = r'\]'
t_LBRACE           = r'\{'
t_RBRACE           = r'\}'
t_COMMA            = r','
t_PERIOD           = r'\.'
t_COLON            = r':'

# Identifiers and reserved words
def t_ID(t):
    r'[A-Za-z_]\w*'
    t.type = reserved.get(t.value, 'ID')
    return t

def t_NUMBER(t):
    r'\d+'
    t.value = int(t.value)
    return t

# String literal
def t_STRING(t):
    r'\"([^\\\n]|(\\.))*?\"'
    t.value = t.value[1:-1].replace('\\"', '"').replace('\\\\', '\\')
    return t

def t_error(t):
    raise ParseError("Illegal character {0!r}".format(t.value[0]), loc(t))


lexer = ply.lex.lex(optimize=1, lextab=None)

if __name__ == "__main__":
    ply.lex.runmain(lexer)
