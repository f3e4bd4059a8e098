# SPDX-FileCopyrightText: 2025 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from argparse import ArgumentParser
from collections.abc import Sequence
from pathlib import Path
from tmvm_output import ALIASES, DEPENDS
from tmvm_tools import FONT_MODES
from tmvm_trace import load_trace

def trace_args():
    """Return an ArgumentParser that lets the user specify a template and traces, parsed into 'traces': Sequence[Trace]. """
    ap = ArgumentParser(add_help=False)
    ap.add_argument('-T', '--template', help='LaTeX template containing TMVM markers', required=True)
    ap.add_argument('-f', '--format', dest='formats', help='Output format (repeatable; default: tex)', action='append', choices=[*DEPENDS, *ALIASES])
    ap.add_argument('-b', '--base-name', help='Output file prefix (default: the trace file name)')
    ap.add_argument('traces', help='Execution traces recorded by the simulator (JSON)', type=Path, nargs='+')
    return ap

def output_args():
    """Return an ArgumentParser for the external renderers' options. Its fields match OutputConfig. """
    ap = ArgumentParser(add_help=False)
    ap.add_argument('-o', '--output-root', help='Write into OUTPUT_ROOT/output/', type=Path, default=Path.cwd())
    ap.add_argument('--font-mode', help='How dvisvgm handles fonts', choices=list(FONT_MODES), default='embed')
    ap.add_argument('--background', help='PNG background color', default='white')
    ap.add_argument('--background-opacity', help='PNG background opacity (0-1)', type=float, default=1.0)
    ap.add_argument('--dpi', help='PNG resolution', type=int, default=96)
    ap.add_argument('--loop', help='GIF loop count (0: forever)', type=int, default=0)
    ap.add_argument('--duration', help='GIF frame duration (ms)', type=int, default=500)
    ap.add_argument('--timeout', help='Seconds to allow each external tool', type=float, default=60)
    ap.add_argument('-n', '--dry-run', help='Show what would be written, but touch nothing', action='store_true')
    for tool in ('latex', 'pdflatex', 'dvisvgm', 'inkscape'):
        ap.add_argument(f'--{tool}', help=f'{tool} executable', default=tool)
    ap.add_argument('-v', '--verbose', help='Log every snapshot and command', action='store_true')
    ap.add_argument('-q', '--quiet', help='Only log warnings and errors', action='store_true')
    return ap


class Traces(Sequence):
    """ Trace files, loaded when accessed. """
    def __init__(self, paths):
        self._paths = list(paths)

    def __len__(self):
        return len(self._paths)

    def __getitem__(self, i):
        return load_trace(self._paths[i])
