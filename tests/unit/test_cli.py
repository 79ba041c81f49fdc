"""Tests for the command line interface."""

import json

import pendulum
from typer.testing import CliRunner

from feedmerge.cli.app import app
from feedmerge.config import load_channels, load_config, load_sources
from feedmerge.models import Collection

runner = CliRunner()


class TestInitCommand:
    def test_creates_files(self, tmp_path):
        result = runner.invoke(app, ["init", "--dir", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert load_config(tmp_path / "feedmerge.yaml").build.max_items == 800
        assert len(load_sources(tmp_path / "sources.yaml").all) == 3
        assert load_channels(tmp_path / "youtube_channels.json")

    def test_refuses_to_overwrite(self, tmp_path):
        runner.invoke(app, ["init", "--dir", str(tmp_path)])
        result = runner.invoke(app, ["init", "--dir", str(tmp_path)])

        assert result.exit_code == 1

    def test_empty_listing(self, tmp_path):
        result = runner.invoke(app, ["init", "--dir", str(tmp_path), "--no-seed-sources"])

        assert result.exit_code == 0, result.output
        assert load_sources(tmp_path / "sources.yaml").all == []
        assert load_channels(tmp_path / "youtube_channels.json") == []


class TestSourcesCommands:
    def test_add_list_remove(self, tmp_path):
        config = str(tmp_path / "feedmerge.yaml")
        runner.invoke(app, ["init", "--dir", str(tmp_path), "--no-seed-sources"])

        result = runner.invoke(
            app,
            ["sources", "add", "--name", "Cast", "--url", "https://cast/rss", "--category", "podcast", "--config", config],
        )
        assert result.exit_code == 0, result.output
        assert [s.name for s in load_sources(tmp_path / "sources.yaml").podcasts] == ["Cast"]

        result = runner.invoke(app, ["sources", "list", "--config", config])
        assert result.exit_code == 0
        assert "Cast" in result.output

        result = runner.invoke(app, ["sources", "remove", "Cast", "--config", config])
        assert result.exit_code == 0
        assert load_sources(tmp_path / "sources.yaml").all == []

    def test_add_duplicate_rejected(self, tmp_path):
        config = str(tmp_path / "feedmerge.yaml")
        runner.invoke(app, ["init", "--dir", str(tmp_path)])

        result = runner.invoke(
            app, ["sources", "add", "--name", "Hacker News", "--url", "https://other/rss", "--config", config]
        )

        assert result.exit_code == 1

    def test_list_without_sources_file(self, tmp_path):
        result = runner.invoke(app, ["sources", "list", "--config", str(tmp_path / "feedmerge.yaml")])
        assert result.exit_code == 1


class TestShowCommand:
    def test_show_collection(self, tmp_path, record_factory):
        output = tmp_path / "docs" / "feed.json"
        output.parent.mkdir()
        collection = Collection(
            generated_at=pendulum.datetime(2024, 1, 1),
            items=[record_factory("a", title="Visible title"), record_factory("v", category="video")],
        )
        output.write_text(collection.to_json(), encoding="utf-8")

        result = runner.invoke(app, ["show", "--config", str(tmp_path / "feedmerge.yaml")])

        assert result.exit_code == 0, result.output
        assert "Records: 2" in result.output
        assert "Visible title" in result.output

    def test_show_legacy_layout(self, tmp_path, record_factory):
        output = tmp_path / "docs" / "feed.json"
        output.parent.mkdir()
        items = json.loads(Collection(items=[record_factory("a")]).to_json())["items"]
        output.write_text(json.dumps(items), encoding="utf-8")

        result = runner.invoke(app, ["show", "--config", str(tmp_path / "feedmerge.yaml")])

        assert result.exit_code == 0, result.output
        assert "legacy" in result.output

    def test_show_missing(self, tmp_path):
        result = runner.invoke(app, ["show", "--config", str(tmp_path / "feedmerge.yaml")])
        assert result.exit_code == 1


class TestBuildCommand:
    def test_invalid_config_exits_nonzero(self, tmp_path):
        (tmp_path / "feedmerge.yaml").write_text("build:\n  max_items: 1\n  min_reserved: 5\n", encoding="utf-8")

        result = runner.invoke(app, ["build", "--config", str(tmp_path / "feedmerge.yaml")])

        assert result.exit_code == 1

    def test_missing_sources_exits_nonzero(self, tmp_path, monkeypatch):
        monkeypatch.delenv("YT_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

        result = runner.invoke(app, ["build", "--config", str(tmp_path / "feedmerge.yaml")])

        assert result.exit_code == 1
        assert not (tmp_path / "docs" / "feed.json").exists()
