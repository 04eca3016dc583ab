from __future__ import annotations

from pathlib import Path

import numpy as np

from patched_conics.__main__ import main

HOP = Path(__file__).resolve().parent.parent / "examples" / "scenarios" / "earth_moon_hop_v1.json"


def test_cli_runs_scenario_and_saves_samples(tmp_path: Path, capsys) -> None:
    out = tmp_path / "hop.npz"
    code = main([str(HOP), "--frames", "30", "--sample-every", "10", "--out", str(out)])
    assert code == 0
    printed = capsys.readouterr().out
    assert "frames: 30" in printed
    assert "parent: Earth" in printed

    data = np.load(out)
    assert data["time"].shape == (4,)
    assert data["craft_pos"].shape == (4, 2)
    assert list(data["parents"]) == ["Earth"] * 4


def test_cli_defaults_to_solar_system(capsys) -> None:
    assert main(["--frames", "2", "--warp", "10"]) == 0
    printed = capsys.readouterr().out
    assert "craft: Craft" in printed
    assert "warp_factor: 10.0" in printed
