#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from tmvm_frames import FrameSequence, IncompleteSequence
from tmvm_output import OutputConfig, persist, resolve
from tmvm_render import TemplateNotFound, load_template, render
from tmvm_tools import ExternalToolFailure
from tmvm_trace import TraceFormatError
import logging
import sys

log = logging.getLogger('tmvm')


def render_frames(template, trace):
    """ Render one document per step of the trace. """
    frames = FrameSequence(trace.total_steps)
    for snapshot in trace:
        frames.set(snapshot.step, render(template, snapshot, trace.input))
    return frames

def main(trace, template, formats, config):
    closure = resolve(formats)
    log.info('%s: %d steps, formats %s', trace.name, trace.total_steps, ', '.join(closure))
    frames = render_frames(template, trace)
    artifacts = persist(closure, frames.finalize(), config)
    if config.dry_run:
        from tabulate import tabulate
        print(tabulate([('' if i is None else i, fmt, path) for i, fmt, path in artifacts], headers=['step', 'format', 'path']))
    return artifacts

def cli(argv=None):
    from argparse import ArgumentParser
    from tmvm_args import Traces, output_args, trace_args
    ap = ArgumentParser(description='Render a Turing machine execution trace as highlighted diagrams.', parents=[trace_args(), output_args()])
    args = ap.parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    try:
        template = load_template(args.template)
    except TemplateNotFound as e:
        print(e, file=sys.stderr)
        return 1

    status = 0
    traces = Traces(args.traces)
    for i, trace_path in enumerate(args.traces):
        try:
            trace = traces[i]
            config = OutputConfig.from_args(args, base_name=args.base_name or trace.name, progress=not args.quiet)
            main(trace, template, args.formats or ['tex'], config)
        except (TraceFormatError, IncompleteSequence, ExternalToolFailure) as e:
            log.error('%s: %s', trace_path, e)
            status = 1
    return status


if __name__ == '__main__':
    sys.exit(cli())
