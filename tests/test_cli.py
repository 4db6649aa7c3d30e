"""Tests for geumbok.apps.cli — argument parsing and offline subcommands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from geumbok.apps.cli import build_arg_parser, main


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEUMBOK_CONFIG_DIR", str(tmp_path))
    monkeypatch.delenv("GEUMBOK_API_TOKEN", raising=False)


class TestArgParser:
    def test_subcommand_required(self) -> None:
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args([])

    def test_classify_joins_words(self) -> None:
        args = build_arg_parser().parse_args(["classify", "커피", "5000원", "--json"])
        assert args.subcommand == "classify"
        assert args.text == ["커피", "5000원"]
        assert args.json is True

    def test_listen_sources_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args(["listen", "--demo", "--script", "x.txt"])

    def test_global_config_file(self) -> None:
        args = build_arg_parser().parse_args(["--config-file", "c.json", "chat"])
        assert args.config_file == "c.json"
        assert args.subcommand == "chat"

    def test_stats_flags(self) -> None:
        args = build_arg_parser().parse_args(["stats", "--age", "70", "--offline"])
        assert args.age == 70
        assert args.gender is None
        assert args.offline is True


class TestClassify:
    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["classify", "커피", "5000원", "샀어", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["intent"] == "expense"
        assert payload["data"] == {
            "description": "커피",
            "amount": 5000,
            "category": "식료품",
        }
        assert payload["screen"] is None

    def test_navigation_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["classify", "복지서비스", "알려줘", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["intent"] == "view_welfare"
        assert payload["data"] is None
        assert payload["screen"] == "welfare"

    def test_corrections_from_config_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = tmp_path / "custom.json"
        config.write_text(json.dumps({"corrections": {"가게부": "가계부"}}), encoding="utf-8")
        main(["--config-file", str(config), "classify", "가게부", "--json"])
        assert json.loads(capsys.readouterr().out)["intent"] == "view_expenses"

    def test_rich_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["classify", "택시", "8000원"]) == 0
        out = capsys.readouterr().out
        assert "8,000원" in out
        assert "교통비" in out


class TestListen:
    def test_script_without_ui(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        script = tmp_path / "script.txt"
        script.write_text("커피 5000원 샀어\n\n가계부 보여줘\n", encoding="utf-8")
        assert main(["listen", "--script", str(script), "--no-ui", "--no-speech"]) == 0
        out = capsys.readouterr().out
        assert "커피 5000원이 식료품 항목으로 등록되었습니다." in out
        assert "2개의 말씀을 처리했습니다." in out


class TestWelfare:
    def test_offline_list_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["welfare", "--offline", "--json"]) == 0
        rows = json.loads(capsys.readouterr().out)
        assert [r["service_id"] for r in rows][:2] == ["WLF00000001", "WLF00000002"]

    def test_offline_search_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["welfare", "--offline", "--search", "치매", "--json"])
        rows = json.loads(capsys.readouterr().out)
        assert [r["title"] for r in rows] == ["치매안심센터 서비스"]

    def test_offline_unknown_id(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["welfare", "--offline", "--id", "nope"]) == 1
        assert "요청한 정보를 찾을 수 없습니다." in capsys.readouterr().out


class TestStats:
    def test_offline(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["stats", "--age", "70", "--offline"]) == 0
        out = capsys.readouterr().out
        assert "70세 또래" in out
        assert "300,000원" in out

    def test_age_required(self) -> None:
        with pytest.raises(SystemExit):
            main(["stats", "--offline"])
