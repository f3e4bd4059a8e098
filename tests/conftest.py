from __future__ import annotations

import subprocess
from pathlib import Path

import pytest


class FakeTools:
    """Stands in for latex, pdflatex, dvisvgm and inkscape by creating their outputs."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.fail: set[str] = set()  # output file names whose command should fail

    def __call__(self, cmd, cwd=None, timeout=None, capture_output=False, text=False):
        self.calls.append(list(cmd))
        tool, target = cmd[0], self._target(cmd, cwd)
        if target.name in self.fail:
            return subprocess.CompletedProcess(cmd, 1, "", f"{tool} failed on {target.name}\n")
        if tool == "inkscape":
            from PIL import Image

            shade = 40 * len(self.calls) % 256
            Image.new("RGB", (4, 4), (shade, 255 - shade, 0)).save(target)
        else:
            target.write_text(f"{tool} output", encoding="utf-8")
        return subprocess.CompletedProcess(cmd, 0, "", "")

    @staticmethod
    def _target(cmd, cwd) -> Path:
        if cmd[0] in ("latex", "pdflatex"):
            suffix = ".pdf" if cmd[0] == "pdflatex" else ".dvi"
            return (Path(cwd) / cmd[-1]).with_suffix(suffix)
        if cmd[0] == "dvisvgm":
            return Path(cmd[cmd.index("-o") + 1])
        if cmd[0] == "inkscape":
            return Path(next(c for c in cmd if c.startswith("--export-filename=")).split("=", 1)[1])
        raise AssertionError(f"unexpected command {cmd}")

    def tools(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_tools(monkeypatch) -> FakeTools:
    fake = FakeTools()
    monkeypatch.setattr("tmvm_tools.subprocess.run", fake)
    return fake
