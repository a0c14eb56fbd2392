"""Tests for CLI commands."""

import pytest
from click.testing import CliRunner

from labelcache.cli import cli


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.delenv("LABELCACHE_IMAGE_ROOT", raising=False)
    monkeypatch.chdir(tmp_path)
    return CliRunner()


@pytest.fixture
def png_files(tmp_path, sample_image_bytes):
    paths = []
    for name in ("page1.png", "page2.png"):
        path = tmp_path / name
        path.write_bytes(sample_image_bytes)
        paths.append(path)
    return paths


@pytest.fixture
def root(tmp_path):
    return tmp_path / "cache"


class TestCLIGroup:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "labelcache" in result.output

    def test_commands_listed(self, runner):
        result = runner.invoke(cli, ["--help"])
        for command in ("store", "list", "delete", "clear", "stats", "show"):
            assert command in result.output


class TestStoreCommand:
    def test_store_single(self, runner, png_files, root):
        result = runner.invoke(
            cli, ["store", str(png_files[0]), "--name", "invoice.png", "--root", str(root)]
        )
        assert result.exit_code == 0
        assert (root / "invoice-1.png").exists()
        assert "id 1:" in result.output

    def test_store_multi_page_with_warning(self, runner, png_files, root):
        args = ["store", *map(str, png_files), "--name", "ship.png", "--multi-page"]
        result = runner.invoke(cli, [*args, "--warning", "Bad field", "--root", str(root)])
        assert result.exit_code == 0
        assert (root / "ship-1-Page1.png").exists()
        assert (root / "ship-1-Page2.png").exists()
        assert (root / "ship-1-Page2.json").exists()

    def test_name_defaults_to_first_file(self, runner, png_files, root):
        result = runner.invoke(cli, ["store", str(png_files[0]), "--root", str(root)])
        assert result.exit_code == 0
        assert (root / "page1-1.png").exists()

    def test_separate_files_keep_their_names(self, runner, png_files, root):
        png_files[1].write_bytes(b"second")
        result = runner.invoke(cli, ["store", *map(str, png_files), "--root", str(root)])
        assert result.exit_code == 0
        assert sorted(p.name for p in root.iterdir()) == ["page1-1.png", "page2-1.png"]
        assert (root / "page2-1.png").read_bytes() == b"second"
        assert (root / "page1-1.png").read_bytes() != b"second"

    def test_name_with_several_files_needs_multi_page(self, runner, png_files, root):
        args = ["store", *map(str, png_files), "--name", "a.png", "--root", str(root)]
        result = runner.invoke(cli, args)
        assert result.exit_code == 2
        assert not root.exists()

    def test_missing_file(self, runner, root):
        result = runner.invoke(cli, ["store", "nonexistent.png", "--root", str(root)])
        assert result.exit_code != 0

    def test_unparsable_cache_fails(self, runner, png_files, root):
        root.mkdir()
        (root / "stray.png").write_bytes(b"x")
        result = runner.invoke(cli, ["store", str(png_files[0]), "--root", str(root)])
        assert result.exit_code == 1


class TestListCommand:
    def test_empty(self, runner, root):
        result = runner.invoke(cli, ["list", "--root", str(root)])
        assert result.exit_code == 0
        assert "Cached Images" in result.output
        assert not root.exists()

    def test_lists_stored(self, runner, png_files, root):
        runner.invoke(cli, ["store", str(png_files[0]), "--name", "a.png", "--root", str(root)])
        result = runner.invoke(cli, ["list", "--root", str(root)])
        assert result.exit_code == 0
        assert "a-1.png" in result.output


class TestDeleteCommand:
    def test_delete_existing(self, runner, png_files, root):
        runner.invoke(cli, ["store", str(png_files[0]), "--name", "a.png", "--root", str(root)])
        result = runner.invoke(cli, ["delete", "a-1.png", "--root", str(root)])
        assert result.exit_code == 0
        assert not (root / "a-1.png").exists()

    def test_delete_missing(self, runner, root):
        result = runner.invoke(cli, ["delete", "a-1.png", "--root", str(root)])
        assert result.exit_code == 1


class TestClearCommand:
    def test_needs_confirmation(self, runner, png_files, root):
        runner.invoke(cli, ["store", str(png_files[0]), "--root", str(root)])
        result = runner.invoke(cli, ["clear", "--root", str(root)], input="n\n")
        assert result.exit_code != 0
        assert (root / "page1-1.png").exists()

    def test_clear_with_yes(self, runner, png_files, root):
        runner.invoke(cli, ["store", str(png_files[0]), "--root", str(root)])
        result = runner.invoke(cli, ["clear", "--yes", "--root", str(root)])
        assert result.exit_code == 0
        assert "cleared" in result.output.lower()
        assert list(root.iterdir()) == []


class TestStatsCommand:
    def test_stats(self, runner, png_files, root):
        runner.invoke(cli, ["store", *map(str, png_files), "--multi-page", "--root", str(root)])
        result = runner.invoke(cli, ["stats", "--root", str(root)])
        assert result.exit_code == 0
        assert "Cache Statistics" in result.output
        assert "Next id" in result.output


class TestShowCommand:
    def test_shows_warnings(self, runner, png_files, root):
        runner.invoke(
            cli,
            ["store", str(png_files[0]), "--name", "w.png", "--warning", "Unknown command",
             "--root", str(root)],
        )
        result = runner.invoke(cli, ["show", "w-1.png", "--root", str(root)])
        assert result.exit_code == 0
        assert "Unknown command" in result.output

    def test_no_warnings(self, runner, png_files, root):
        runner.invoke(cli, ["store", str(png_files[0]), "--name", "c.png", "--root", str(root)])
        result = runner.invoke(cli, ["show", "c-1.png", "--root", str(root)])
        assert result.exit_code == 0
        assert "no warnings" in result.output

    def test_missing_image(self, runner, root):
        result = runner.invoke(cli, ["show", "x-1.png", "--root", str(root)])
        assert result.exit_code == 1
