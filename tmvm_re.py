# SPDX-FileCopyrightText: 2025 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
import re

STRING = r'''(?:'[^']*'|"[^"]*")'''
ID = r'[A-Za-z_][A-Za-z0-9_]*'
BLANK = 'BLANK'
SEP = r',\s*'


def symbol_literal(symbol):
    """ Return the symbol as it is written in an edge's symbol list. (None is the blank symbol.) """
    if symbol is None:
        return BLANK
    # Symbols containing ' are written "like'this"; nothing else is escaped.
    return f'"{symbol}"' if "'" in symbol else f"'{symbol}'"

def not_symbol_re(symbol):
    return f'(?:(?!{re.escape(symbol_literal(symbol))})(?:{STRING}|{ID}))'

def symbol_list_re(symbol):
    '''
    Match a comma-separated symbol list containing the symbol once.
    Two shapes: the symbol followed by at least one other element, or the symbol as the last element.
    '''
    lit, ns = re.escape(symbol_literal(symbol)), not_symbol_re(symbol)
    return f'(?:(?:(?:{ns}{SEP})*{lit}{SEP}(?:{ns}{SEP})*{ns})|(?:{ns}{SEP})*{lit})'

def node_re(state):
    return re.compile(rf'\\TMVMNODE\{{{re.escape(state)}\}}')

def edge_re(state, symbol):
    return re.compile(rf'\\TMVMEDGE\{{{re.escape(state)}\}}\{{{symbol_list_re(symbol)}\}}')

def find_and_replace(text, pattern, token):
    """ Replace each match of pattern with token, space-padded so the text keeps its length. """
    return pattern.sub(lambda m: token.ljust(len(m.group(0))), text)
