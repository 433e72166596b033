"""Tests for runtime.output helpers."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path, Path as RealPath
from typing import cast

import pytest

from css_sprite_generator.main import SpriteResult
from css_sprite_generator.packing import PackingPlan, Placement
from css_sprite_generator.runtime import output as runtime_output
from css_sprite_generator.type_defs import OutputNames


def _result() -> SpriteResult:
    plan = PackingPlan(4, 4, (Placement("dot", 0, 0, 4, 4),))
    return SpriteResult(plan=plan, png=b"\x89PNG fake", css=".x {}\n")


def test_setup_output_directory_creates_path(tmp_path: Path) -> None:
    target = tmp_path / "new_dir" / "nested"
    result = runtime_output.setup_output_directory(str(target))
    assert result == target
    assert target.is_dir()


def test_setup_output_directory_fallback(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    class FailingPath(type(RealPath())):
        def mkdir(  # type: ignore[override]
            self,
            mode: int = 0o777,
            parents: bool = False,  # noqa: FBT001, FBT002
            exist_ok: bool = False,  # noqa: FBT001, FBT002
        ) -> None:
            if "restricted" in str(self):
                raise PermissionError("Mock failure")
            return super().mkdir(mode=mode, parents=parents, exist_ok=exist_ok)

    monkeypatch.chdir(tmp_path)
    result = runtime_output.setup_output_directory(
        "restricted",
        path_factory=cast(Callable[[str], Path], FailingPath),
    )
    assert result.name == runtime_output.FALLBACK_OUTPUT_DIR
    assert (tmp_path / runtime_output.FALLBACK_OUTPUT_DIR).is_dir()


def test_save_outputs_writes_both_files(tmp_path: Path) -> None:
    result = _result()
    sprite_path, css_path = runtime_output.save_outputs(
        result,
        tmp_path / "out",
        OutputNames(sprite_name="icons.png", css_name="icons.css"),
    )
    assert sprite_path == tmp_path / "out" / "icons.png"
    assert sprite_path.read_bytes() == result.png
    assert css_path.read_text(encoding="utf-8") == result.css


def test_save_outputs_overwrites(tmp_path: Path) -> None:
    (tmp_path / "sprite.css").write_text("old", encoding="utf-8")
    _, css_path = runtime_output.save_outputs(_result(), tmp_path,
                                              OutputNames())
    assert css_path.read_text(encoding="utf-8") == ".x {}\n"


def test_save_outputs_logs_paths(
    tmp_path: Path,
    log_capture: pytest.LogCaptureFixture,
) -> None:
    runtime_output.save_outputs(_result(), tmp_path, OutputNames())
    assert "Sprite sheet saved to" in log_capture.text
    assert "Stylesheet saved to" in log_capture.text
