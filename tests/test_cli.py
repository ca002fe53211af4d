import json

import pytest
from click.testing import CliRunner

from seriespi.cli import main
from seriespi.formats import FORMATS


PI_20 = "3.14159265358979323846"


def test_compute_stdout():
    result = CliRunner().invoke(main, ["compute", "--digits", "20", "--workers", "2"])
    assert result.exit_code == 0, result.output
    assert result.output.strip()[:20] == PI_20[:20]


def test_compute_json_with_verify():
    result = CliRunner().invoke(main, ["compute", "--digits", "30", "--workers", "3", "--format", "json", "--verify"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["digits"] == 30
    assert payload["terms"] == 5
    assert payload["value"].startswith(PI_20)


def test_compute_to_file_then_verify(tmp_path):
    out = tmp_path / "pi.txt"
    runner = CliRunner()
    result = runner.invoke(main, ["compute", "--digits", "40", "--workers", "2", "--label", "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert out.read_text().startswith("Pi = 3.14159")
    result = runner.invoke(main, ["verify", str(out), "--samples", "40"])
    assert result.exit_code == 0, result.output
    assert result.output.startswith("ok")


def test_verify_detects_bad_digits(tmp_path):
    out = tmp_path / "bad.txt"
    out.write_text("3.14159000000")
    result = CliRunner().invoke(main, ["verify", str(out)])
    assert result.exit_code != 0
    assert "verification failed" in result.output


def test_compute_rejects_zero_digits():
    result = CliRunner().invoke(main, ["compute", "--digits", "0"])
    assert result.exit_code != 0
    assert "requested_digits must be >= 1" in result.output


def test_workers_from_environment():
    result = CliRunner().invoke(
        main,
        ["compute", "--digits", "15", "--format", "csv"],
        env={"SERIESPI_COMPUTE_WORKERS": "3"},
    )
    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[1].split(",")[1] == "3"


def test_bench_table():
    result = CliRunner().invoke(main, ["bench", "--start", "10", "--stop", "30", "--step", "10", "--workers", "2", "--samples", "1"])
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert len(lines) == 7
    assert "factorial cache init" in result.output


@pytest.mark.parametrize("fmt", FORMATS)
def test_verify_reads_every_format(tmp_path, fmt):
    out = tmp_path / f"pi.{fmt}"
    runner = CliRunner()
    result = runner.invoke(main, ["compute", "--digits", "40", "--workers", "2", "--format", fmt, "--out", str(out)])
    assert result.exit_code == 0, result.output
    result = runner.invoke(main, ["verify", str(out), "--samples", "40"])
    assert result.exit_code == 0, result.output
    assert result.output.startswith("ok: pi spigot (39 digits)")


def test_verify_unreadable_json(tmp_path):
    out = tmp_path / "pi.json"
    out.write_text('{"elapsed":0.5}')
    result = CliRunner().invoke(main, ["verify", str(out)])
    assert result.exit_code != 0
    assert "cannot read result" in result.output
