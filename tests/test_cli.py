import json
import subprocess

import pytest
from pkg.usbkit import cli


def test_scan_files_text(tmp_path, fixture_path, capsys):
    rc = cli.main(["scan", "--workdir", str(tmp_path), str(fixture_path("mbr_partitioned"))])
    out = capsys.readouterr().out
    assert rc == 0
    assert 'USB Storage "Flash Disk"' in out
    assert "Mount point: /Volumes/TEST" in out


def test_scan_json_and_export(tmp_path, fixture_path, capsys):
    rc = cli.main([
        "scan", "--workdir", str(tmp_path), "--json", "--export",
        str(fixture_path("no_partition")), str(fixture_path("gpt_partitioned")),
    ])
    captured = capsys.readouterr()
    assert rc == 0
    data = json.loads(captured.out)
    assert [d["devices"][0]["name"] for d in data] == ["PenDrive", "PenDrive"]
    assert data[0]["devices"][0]["media"][0]["volumes"] == []
    assert len(list(tmp_path.glob("no_partition-*.json"))) == 1
    assert "exported" in captured.err


def test_scan_reports_errors_and_continues(tmp_path, fixture_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text('{"SPUSBDataType": [1]}', encoding="utf-8")
    garbled = tmp_path / "garbled.json"
    garbled.write_text("{not json", encoding="utf-8")
    rc = cli.main([
        "scan", "--workdir", str(tmp_path / "work"),
        str(bad), str(garbled), str(tmp_path / "missing.json"), str(fixture_path("gpt_partitioned")),
    ])
    captured = capsys.readouterr()
    assert rc == 1
    assert "data[SPUSBDataType][0]" in captured.err
    assert "BAD_JSON" in captured.err
    assert "SOURCE_UNREADABLE" in captured.err
    assert 'USB Storage "PenDrive"' in captured.out


def test_scan_without_files_uses_profiler(tmp_path, inventory, monkeypatch, capsys):
    data = inventory("gpt_partitioned")

    def fake_run(cmd, **kwargs):
        assert cmd == ["system_profiler", "-json", "SPUSBDataType"]
        return subprocess.CompletedProcess(cmd, 0, stdout=json.dumps(data), stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    rc = cli.main(["scan", "--workdir", str(tmp_path)])
    assert rc == 0
    assert "OEL9" in capsys.readouterr().out


def test_scan_profiler_missing(tmp_path, monkeypatch, capsys):
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)
    rc = cli.main(["scan", "--workdir", str(tmp_path)])
    assert rc == 1
    assert "PROBE_FAILED" in capsys.readouterr().err


def test_verify_log(tmp_path, fixture_path, capsys):
    cli.main(["scan", "--workdir", str(tmp_path), str(fixture_path("no_partition"))])
    capsys.readouterr()
    assert cli.main(["verify-log", "--workdir", str(tmp_path)]) == 0
    assert capsys.readouterr().out.startswith("ok 2 events")


def test_requires_subcommand():
    with pytest.raises(SystemExit):
        cli.main([])


def test_options_after_subcommand(tmp_path, fixture_path, capsys):
    rc = cli.main(["scan", str(fixture_path("gpt_partitioned")), "--workdir", str(tmp_path), "-v", "--json"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out)[0]["devices"][0]["name"] == "PenDrive"
    assert (tmp_path / "log.jsonl").exists()
    assert cli.main(["verify-log", "-v", "--workdir", str(tmp_path)]) == 0


def test_deeply_nested_file_does_not_stop_scan(tmp_path, fixture_path, capsys):
    deep = tmp_path / "deep.json"
    deep.write_text("[" * 200_000 + "]" * 200_000, encoding="utf-8")
    rc = cli.main(["scan", "--workdir", str(tmp_path / "work"), str(deep), str(fixture_path("gpt_partitioned"))])
    captured = capsys.readouterr()
    assert rc == 1
    assert "BAD_JSON" in captured.err
    assert 'USB Storage "PenDrive"' in captured.out
