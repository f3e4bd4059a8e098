# SPDX-FileCopyrightText: 2025 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from contextlib import contextmanager
from pathlib import Path
import logging
import shutil
import subprocess
import tempfile

FONT_MODES = {'embed': [], 'none': ['--no-fonts'], 'woff': ['--font-format=woff']}

log = logging.getLogger('tmvm.tools')


class ExternalToolFailure(RuntimeError):
    pass


def run_tool(cmd, cwd=None, timeout=None, output=None):
    '''
    Run an external renderer to completion. Raise ExternalToolFailure if it can't be started,
    times out, exits nonzero, or (when given) doesn't produce the output file.
    '''
    cmd = [str(c) for c in cmd]
    log.debug('Running %s', ' '.join(cmd))
    try:
        proc = subprocess.run(cmd, cwd=cwd, timeout=timeout, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise ExternalToolFailure(f'{cmd[0]}: not installed ({e})') from e
    except subprocess.TimeoutExpired as e:
        raise ExternalToolFailure(f'{cmd[0]}: timed out after {timeout}s') from e
    if proc.returncode:
        tail = (proc.stderr or proc.stdout or '').strip().splitlines()[-5:]
        raise ExternalToolFailure(f'{cmd[0]}: exit status {proc.returncode}' + ''.join(f'\n  {line}' for line in tail))
    if output is not None and not Path(output).exists():
        raise ExternalToolFailure(f'{cmd[0]}: produced no {output}')
    return proc

@contextmanager
def scratch(source):
    """ Yield a copy of source inside a temporary directory that is removed on every exit path. """
    with tempfile.TemporaryDirectory(prefix='tmvm-') as tmp:
        copy = Path(tmp) / Path(source).name
        shutil.copyfile(source, copy)
        yield copy

def _fresh(target):
    target = Path(target)
    target.unlink(missing_ok=True)
    return target

def compile_latex(tex_path, target, config):
    """ Compile a .tex file to target, a .dvi (latex) or .pdf (pdflatex) file. """
    target = _fresh(target)
    engine = config.pdflatex if target.suffix == '.pdf' else config.latex
    with scratch(tex_path) as src:
        built = src.with_suffix(target.suffix)
        run_tool([engine, '-interaction=nonstopmode', '-halt-on-error', src.name],
                 cwd=src.parent, timeout=config.timeout, output=built)
        shutil.move(built, target)
    return target

def dvi_to_svg(dvi_path, target, config):
    if config.font_mode not in FONT_MODES:
        raise ValueError(f'Unknown font mode {config.font_mode!r} (expected one of {", ".join(FONT_MODES)})')
    target = _fresh(target)
    run_tool([config.dvisvgm, *FONT_MODES[config.font_mode], '-o', target, dvi_path],
             timeout=config.timeout, output=target)
    return target

def tex_to_svg(tex_path, target, config):
    """ Render a .tex file to SVG via an intermediate DVI that is not kept. """
    with scratch(tex_path) as src:
        dvi = compile_latex(src, src.with_suffix('.dvi'), config)
        return dvi_to_svg(dvi, target, config)

def svg_to_png(svg_path, target, config):
    target = _fresh(target)
    run_tool([config.inkscape, '--export-type=png', f'--export-filename={target}',
              f'--export-background={config.background}',
              f'--export-background-opacity={config.background_opacity}',
              f'--export-dpi={config.dpi}', '--export-overwrite', svg_path],
             timeout=config.timeout, output=target)
    return target

def assemble_gif(png_paths, target, config):
    """ Combine the PNG frames, in order, into one looping GIF. """
    from PIL import Image
    if not png_paths:
        raise ExternalToolFailure('No frames to animate.')
    target = _fresh(target)
    frames = []
    try:
        for p in png_paths:
            with Image.open(p) as img:
                frames.append(img.convert('RGBA'))
    except OSError as e:
        raise ExternalToolFailure(f'Could not read frame: {e}') from e
    frames[0].save(target, format='GIF', save_all=True, append_images=frames[1:],
                   loop=config.loop, duration=config.duration, disposal=2)
    return target
