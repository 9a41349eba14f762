import json

import pytest

from src.run_editor import main
from src.seatpath.segment import default_segment
from src.seatpath.segment_io import load_segments_json, save_segments_json
from src.utils import debug


def test_default_run_prints_starter_segment(capsys) -> None:
    main([])
    out = capsys.readouterr().out.strip()
    assert out == "S:(-2,-2,1). A:(-1,1,4). B:(1,-1,-4), E:(2,2,-1), R:(-), D:(-)"


def test_add_random_smooth_and_write_files(tmp_path, capsys) -> None:
    src = tmp_path / "in.json"
    save_segments_json(src, [default_segment()])
    dst = tmp_path / "out.json"
    svg = tmp_path / "out.svg"
    main(
        [
            "--input", str(src),
            "--anchor", "2",
            "--add-random", "2",
            "--relative",
            "--duration", "1.5",
            "--smooth",
            "--plan", "0",
            "--output", str(dst),
            "--svg", str(svg),
        ]
    )
    lines = capsys.readouterr().out.strip().split("\n\n")
    assert len(lines) == 3
    assert lines[1].endswith("R:(true), D:(1.5)")
    saved = load_segments_json(dst)
    assert len(saved) == 3
    raw = json.loads(dst.read_text(encoding="utf-8"))
    assert raw[2]["pathExtra"]["isRelative"] is True
    assert svg.read_text(encoding="utf-8").count("<circle") == 9


def test_verbose_logs(capsys) -> None:
    try:
        main(["-v", "--add-random", "1"])
    finally:
        debug.set_verbose(False)
    out = capsys.readouterr().out
    assert "add_random_segment" in out
    assert "view_segments: n=2" in out


def test_invalid_arguments() -> None:
    with pytest.raises(ValueError):
        main(["--duration", "0"])
    with pytest.raises(ValueError):
        main(["--add-random", "-1"])
    with pytest.raises(IndexError):
        main(["--anchor", "12"])
