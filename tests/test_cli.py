from __future__ import annotations

import json
from pathlib import Path

import pytest

from catalogdemo import cli

CONFIG = "tests/fixtures/config.valid.yml"


def test_parser_defaults():
    args = cli.build_parser().parse_args(["clone", "--dry-run"])
    assert args.type == "MODIFIER_LIST"
    assert args.config == "config.yml"
    assert args.dry_run is True


def test_missing_config_exits_with_2(tmp_path: Path):
    with pytest.raises(SystemExit) as exc:
        cli.main(["list", "--config", str(tmp_path / "nope.yml")])
    assert exc.value.code == 2


def test_offline_clone_writes_report(tmp_path: Path):
    report = tmp_path / "out" / "report.json"
    code = cli.main([
        "clone",
        "--config", CONFIG,
        "--source-file", "tests/fixtures/modifier_lists.source.json",
        "--target-file", "tests/fixtures/modifier_lists.target.json",
        "--report", str(report),
    ])

    assert code == 0
    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["dry_run"] is True
    assert data["summary"]["merged"] == 1
    assert data["summary"]["created"] == 1
    assert [o["id"] for o in data["objects"]] == ["TGT_SIZE", "#SRC_COLOR"]


def test_snapshot_files_must_come_in_pairs():
    code = cli.main([
        "clone",
        "--config", CONFIG,
        "--source-file", "tests/fixtures/modifier_lists.source.json",
    ])
    assert code == 2


def test_clone_uses_tokens_from_config(monkeypatch):
    seen = {}

    def fake_run_clone(source, target, kind, dry_run=False, batch_size=1000):
        seen["tokens"] = (source.client.access_token, target.client.access_token)
        seen["base_url"] = source.client.base_url
        seen["batch_size"] = batch_size
        return cli.CloneResult(type_name=kind.type_name)

    monkeypatch.setattr(cli, "run_clone", fake_run_clone)

    assert cli.main(["clone", "--config", CONFIG, "--target-token", "override"]) == 0
    assert seen["tokens"] == ("source-token", "override")
    assert seen["base_url"] == "https://catalog.example.test"
    assert seen["batch_size"] == 2
