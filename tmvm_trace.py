# SPDX-FileCopyrightText: 2025 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
import json


class TraceFormatError(ValueError):
    """Raised when a recorded execution trace fails validation."""


@dataclass(frozen=True)
class Snapshot:
    '''
    One recorded step of a TM's execution.
    symbol is the symbol under the head (None when blank); tape cells may also be None.
    '''
    state: str
    symbol: str | None
    tape: tuple
    step: int
    total_steps: int

    def __str__(self):
        symbol = 'BLANK' if self.symbol is None else repr(self.symbol)
        return f'[{self.step}/{self.total_steps}] state={self.state} symbol={symbol} tape={"".join(c or "" for c in self.tape)}'


@dataclass(frozen=True)
class Trace(Sequence):
    """ A simulator run: the input it was given and its snapshots, in recorded order. """
    input: tuple
    snapshots: tuple
    total_steps: int
    path: Path | None = None

    def __len__(self):
        return len(self.snapshots)

    def __getitem__(self, i):
        return self.snapshots[i]

    @property
    def name(self):
        return self.path.stem if self.path else 'trace'


def _symbol(value, label):
    if value is not None and not isinstance(value, str):
        raise TraceFormatError(f'{label} must be a string or null')
    return value

def _symbols(value, label):
    if not isinstance(value, list):
        raise TraceFormatError(f'{label} must be an array')
    return tuple(_symbol(s, f'{label}[{i}]') for i, s in enumerate(value))

def parse_trace(raw, path=None):
    if not isinstance(raw, dict):
        raise TraceFormatError('root must be a JSON object')
    steps = raw.get('steps')
    if not isinstance(steps, list) or not steps:
        raise TraceFormatError('steps must be a non-empty array')
    input_symbols = _symbols(raw.get('input', []), 'input')
    total_steps = raw.get('total_steps', len(steps))
    if not isinstance(total_steps, int) or isinstance(total_steps, bool) or total_steps < 1:
        raise TraceFormatError('total_steps must be an int >= 1')

    snapshots, seen = [], set()
    for i, item in enumerate(steps):
        if not isinstance(item, dict):
            raise TraceFormatError(f'steps[{i}] must be an object')
        state, step = item.get('state'), item.get('step', i)
        if not isinstance(state, str) or not state:
            raise TraceFormatError(f'steps[{i}].state must be a non-empty string')
        if not isinstance(step, int) or isinstance(step, bool) or not 0 <= step < total_steps:
            raise TraceFormatError(f'steps[{i}].step must be an int in [0, {total_steps})')
        if step in seen:
            raise TraceFormatError(f'steps[{i}].step {step} recorded twice')
        seen.add(step)
        snapshots.append(Snapshot(
            state=state,
            symbol=_symbol(item.get('symbol'), f'steps[{i}].symbol'),
            tape=_symbols(item.get('tape', []), f'steps[{i}].tape'),
            step=step,
            total_steps=total_steps))
    return Trace(input_symbols, tuple(snapshots), total_steps, path)

def load_trace(path):
    """ Load and validate a JSON execution trace, as recorded by the simulator. """
    path = Path(path)
    if not path.is_file():
        raise TraceFormatError(f'file not found: {path}')
    try:
        raw = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise TraceFormatError(f'{path}: invalid JSON: {e.msg} (line {e.lineno}, col {e.colno})') from e
    return parse_trace(raw, path)
