# SPDX-FileCopyrightText: 2025 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from tmvm_re import edge_re, find_and_replace, node_re
import logging

HIGHLIGHT = 'highlight'
BLANK_GLYPH = r'\square'
CURR_STATE = '% TM_VM_REPLACE_CURR_STATE %'
CURR_SYMBOL = '% TM_VM_REPLACE_CURR_SYMBOL %'
COMPLETE_INPUT = '% TM_VM_REPLACE_COMPLETE_INPUT %'
COMPLETE_TAPE = '% TM_VM_REPLACE_COMPLETE_TAPE %'
STEP = '% TM_VM_REPLACE_STEP %'

log = logging.getLogger('tmvm.render')


class TemplateNotFound(FileNotFoundError):
    pass


def load_template(path):
    try:
        with open(path, encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError as e:
        raise TemplateNotFound(f"File '{path}' not found: {e}") from e

def render(template, snapshot, input_symbols):
    """ Return the template with the snapshot's state and edge highlighted and its scalars filled in. """
    log.debug('%s', snapshot)
    text = find_and_replace(template, node_re(snapshot.state), HIGHLIGHT)
    text = find_and_replace(text, edge_re(snapshot.state, snapshot.symbol), HIGHLIGHT)
    scalars = {
        CURR_STATE: snapshot.state,
        CURR_SYMBOL: BLANK_GLYPH if snapshot.symbol is None else snapshot.symbol,
        COMPLETE_INPUT: ''.join(s or '' for s in input_symbols),
        COMPLETE_TAPE: ''.join(s or '' for s in snapshot.tape),
        STEP: str(snapshot.step),
    }
    for token, value in scalars.items():
        text = text.replace(token, value)
    return text
