# lextab.py. This file automatically created by PLY (version 3.11). Don't edit!
_tabversion   = '3.10'
_lextokens    = set(('COLON', 'COMMA', 'FALSE', 'ID', 'LBRACE', 'LBRACKET', 'LPAREN', 'MODULE', 'NUMBER', 'PERIOD', 'RBRACE', 'RBRACKET', 'RPAREN', 'STRING', 'TRUE'))
_lexreflags   = 64
_lexliterals  = ''
_lexstateinfo = {'INITIAL': 'inclusive'}
_lexstatere   = {'INITIAL': [('(?P<t_newline>\\n+)|(?P<t_comment>(/\\*(.|\\n)*?\\*/)|(//[^\\n]*))|(?P<t_ID>[A-Za-z_]\\w*)|(?P<t_NUMBER>\\d+)|(?P<t_STRING>\\"([^\\\\\\n]|(\\\\.))*?\\")|(?P<t_LPAREN>\\()|(?P<t_RPAREN>\\))|(?P<t_LBRACKET>\\[)|(?P<t_RBRACKET>\\])|(?P<t_LBRACE>\\{)|(?P<t_RBRACE>\\})|(?P<t_PERIOD>\\.)|(?P<t_COMMA>,)|(?P<t_COLON>:)', [None, ('t_newline', 'newline'), ('t_comment', 'comment'), None, None, None, ('t_ID', 'ID'), ('t_NUMBER', 'NUMBER'), ('t_STRING', 'STRING'), None, None, (None, 'LPAREN'), (None, 'RPAREN'), (None, 'LBRACKET'), (None, 'RBRACKET'), (None, 'LBRACE'), (None, 'RBRACE'), (None, 'PERIOD'), (None, 'COMMA'), (None, 'COLON')])]}
_lexstateignore = {'INITIAL': ' \t\r\x0c'}
_lexstateerrorf = {'INITIAL': 't_error'}
_lexstateeoff = {}
