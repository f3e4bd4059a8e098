# SPDX-FileCopyrightText: 2025 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from collections.abc import Sequence


class OutOfRange(IndexError):
    pass

class FrameAlreadySet(ValueError):
    pass

class IncompleteSequence(RuntimeError):
    pass


class FrameSequence(Sequence):
    """ One rendered document per execution step. Each slot is written once, then read. """
    def __init__(self, total_steps):
        if total_steps < 1:
            raise ValueError(f'total_steps must be >= 1 (got {total_steps})')
        self._slots = [None] * total_steps

    def __len__(self):
        return len(self._slots)

    def __getitem__(self, step):
        return self._slots[step]

    def set(self, step, content):
        if not 0 <= step < len(self._slots):
            raise OutOfRange(f'step {step} outside [0, {len(self._slots)})')
        if self._slots[step] is not None:
            raise FrameAlreadySet(f'step {step} was already rendered')
        self._slots[step] = content

    def missing(self):
        return [i for i, content in enumerate(self._slots) if content is None]

    def finalize(self):
        if missing := self.missing():
            raise IncompleteSequence(f'{len(missing)} of {len(self)} frames never rendered: steps {missing[:10]}{"..." if len(missing) > 10 else ""}')
        return list(self._slots)
