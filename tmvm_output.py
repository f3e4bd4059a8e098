# SPDX-FileCopyrightText: 2025 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from dataclasses import dataclass, fields
from pathlib import Path
import logging

from tmvm_tools import ExternalToolFailure, assemble_gif, compile_latex, dvi_to_svg, svg_to_png, tex_to_svg

TEX, PDF, DVI, SVG, PNG, GIF = 'tex', 'pdf', 'dvi', 'svg', 'png', 'gif'
FORMATS = (TEX, PDF, DVI, SVG, PNG, GIF)  # Closure order
ALIASES = {'document': TEX, 'native-export': PDF, 'companion-export': DVI,
           'vector-image': SVG, 'raster-image': PNG, 'animation': GIF}
DEPENDS = {TEX: {TEX}, PDF: {TEX, PDF}, DVI: {TEX, DVI}, SVG: {TEX, SVG}, PNG: {TEX, SVG, PNG}, GIF: {TEX, SVG, PNG, GIF}}

log = logging.getLogger('tmvm.output')


@dataclass(frozen=True)
class OutputConfig:
    output_root: Path = Path('.')
    base_name: str = 'trace'
    font_mode: str = 'embed'
    background: str = 'white'
    background_opacity: float = 1.0
    dpi: int = 96
    loop: int = 0
    duration: int = 500
    timeout: float | None = 60
    dry_run: bool = False
    progress: bool = False
    latex: str = 'latex'
    pdflatex: str = 'pdflatex'
    dvisvgm: str = 'dvisvgm'
    inkscape: str = 'inkscape'

    @property
    def output_dir(self):
        return Path(self.output_root) / 'output'

    def frame_path(self, index, fmt):
        return self.output_dir / f'{self.base_name}-{index}.{fmt}'

    def animation_path(self):
        return self.output_dir / f'{self.base_name}.{GIF}'

    @classmethod
    def from_args(cls, args, **overrides):
        given = {f.name: getattr(args, f.name) for f in fields(cls) if hasattr(args, f.name)}
        return cls(**(given | overrides))


def resolve(requested):
    """ Return the formats needed to produce the requested ones, in the order they must be made. """
    wanted = set()
    for fmt in requested:
        fmt = ALIASES.get(fmt, fmt)
        if fmt not in DEPENDS:
            raise ValueError(f'Unknown output format {fmt!r}')
        wanted |= DEPENDS[fmt]
    return [fmt for fmt in FORMATS if fmt in wanted]

def _derive(fmt, index, frame, closure, config):
    target = config.frame_path(index, fmt)
    if fmt == TEX:
        target.write_text(frame, encoding='utf-8')
    elif fmt in (PDF, DVI):
        compile_latex(config.frame_path(index, TEX), target, config)
    elif fmt == SVG and DVI in closure:
        dvi_to_svg(config.frame_path(index, DVI), target, config)
    elif fmt == SVG:
        tex_to_svg(config.frame_path(index, TEX), target, config)
    elif fmt == PNG:
        svg_to_png(config.frame_path(index, SVG), target, config)
    return target

def _source(fmt, closure):
    if fmt == TEX:
        return None
    if fmt == SVG and DVI in closure:
        return DVI
    return SVG if fmt == PNG else TEX

def persist(closure, frames, config):
    '''
    Write every frame in every format of the closure, then the animation if requested.
    Returns [(index, format, path)] (index None for the animation).
    A failed artifact is logged and skipped along with whatever depends on it; once everything
    else is written, ExternalToolFailure lists what is missing.
    '''
    from tqdm import tqdm
    artifacts, missing = [], []
    if not config.dry_run:
        config.output_dir.mkdir(parents=True, exist_ok=True)

    for index in tqdm(range(len(frames)), desc=config.base_name, unit='frame', disable=not config.progress):
        failed = set()
        for fmt in closure:
            if fmt == GIF:
                continue
            target = config.frame_path(index, fmt)
            artifacts.append((index, fmt, target))
            if config.dry_run:
                log.info('Would write %s', target)
                continue
            if _source(fmt, closure) in failed:
                failed.add(fmt)
                missing.append(target)
                log.warning('Skipping %s: its %s input is missing', target, _source(fmt, closure))
                continue
            try:
                _derive(fmt, index, frames[index], closure, config)
                log.info('Wrote %s', target)
            except ExternalToolFailure as e:
                failed.add(fmt)
                missing.append(target)
                log.warning('Failed to write %s: %s', target, e)

    if GIF in closure:
        target = config.animation_path()
        artifacts.append((None, GIF, target))
        pngs = [config.frame_path(i, PNG) for i in range(len(frames))]
        if config.dry_run:
            log.info('Would assemble %s from %d frames', target, len(pngs))
        elif any(p in missing for p in pngs):
            missing.append(target)
            log.warning('Skipping %s: frames are missing', target)
        else:
            try:
                assemble_gif(pngs, target, config)
                log.info('Wrote %s', target)
            except ExternalToolFailure as e:
                missing.append(target)
                log.warning('Failed to write %s: %s', target, e)

    if missing:
        raise ExternalToolFailure(f'{len(missing)} artifact(s) not written: ' + ', '.join(map(str, missing)))
    return artifacts
