"""Tests for the mcassets.cli.sync module."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from mcassets.blobcache import DirectoryBlobCache, cache_key
from mcassets.cli import cli
from mcassets.errors import DownloadFailed, VersionNotFound
from mcassets.models import SyncResult


def _result() -> SyncResult:
    return SyncResult(
        indices_processed=["17"],
        objects_downloaded=3,
        objects_reused=2,
        total_bytes_on_disk=2048,
    )


def _populate(assets_dir: Path) -> None:
    """Stand-in for a successful sync writing to the assets dir."""
    path = assets_dir / "indexes" / "17.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("{}")


@patch("mcassets.cli.sync.configure_logging", MagicMock())
class TestSyncCommand:
    """mcassets sync without a cache directory."""

    @patch("mcassets.cli.sync.sync_versions", new_callable=AsyncMock)
    def test_prints_summary(self, mock_sync: AsyncMock, tmp_path: Path):
        mock_sync.return_value = _result()
        runner = CliRunner()
        result = runner.invoke(
            cli, ["sync", "-d", str(tmp_path), "--versions", "1.21.1\n1.20.6"]
        )
        assert result.exit_code == 0, result.output
        assert "17" in result.output
        assert "2.00 kb" in result.output
        args, kwargs = mock_sync.call_args
        assert args == (["1.21.1", "1.20.6"], tmp_path)
        assert kwargs["config"].batch_size == 20

    @patch("mcassets.cli.sync.sync_versions", new_callable=AsyncMock)
    def test_jobs_sets_batch_size(self, mock_sync: AsyncMock, tmp_path: Path):
        mock_sync.return_value = _result()
        runner = CliRunner()
        result = runner.invoke(
            cli, ["sync", "-d", str(tmp_path), "--versions", "1.21.1", "-j", "4"]
        )
        assert result.exit_code == 0, result.output
        assert mock_sync.call_args.kwargs["config"].batch_size == 4

    @patch("mcassets.cli.sync.sync_versions", new_callable=AsyncMock)
    def test_version_from_file(self, mock_sync: AsyncMock, tmp_path: Path):
        mock_sync.return_value = _result()
        props = tmp_path / "gradle.properties"
        props.write_text("hello world\n#minecraft_version=1.10\nminecraft_version=1.21.1\n")
        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "sync",
                "-d",
                str(tmp_path / "assets"),
                "--version-file",
                str(props),
                "--version-regexp",
                r"/^\s*minecraft_version\s*=\s*(.+)\s*$/m",
            ],
        )
        assert result.exit_code == 0, result.output
        assert mock_sync.call_args.args[0] == ["1.21.1"]

    @patch("mcassets.cli.sync.sync_versions", new_callable=AsyncMock)
    def test_missing_version_file_without_versions(self, mock_sync: AsyncMock, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "sync",
                "--version-file",
                str(tmp_path / "missing.properties"),
                "--version-regexp",
                "/(.*)/",
            ],
        )
        assert result.exit_code == 2
        mock_sync.assert_not_called()

    @patch("mcassets.cli.sync.sync_versions", new_callable=AsyncMock)
    def test_unknown_version_fails(self, mock_sync: AsyncMock, tmp_path: Path):
        mock_sync.side_effect = VersionNotFound("nonexistent-1.0")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["sync", "-d", str(tmp_path), "--versions", "nonexistent-1.0"]
        )
        assert result.exit_code == 1
        assert "version nonexistent-1.0 not found" in result.output

    @patch("mcassets.cli.sync.sync_versions", new_callable=AsyncMock)
    def test_download_failure_fails(self, mock_sync: AsyncMock, tmp_path: Path):
        mock_sync.side_effect = DownloadFailed("https://x/ab/abc", "HTTP error 500")
        runner = CliRunner()
        result = runner.invoke(cli, ["sync", "-d", str(tmp_path), "--versions", "1.21.1"])
        assert result.exit_code == 1
        assert "HTTP error 500" in result.output


@patch("mcassets.cli.sync.configure_logging", MagicMock())
class TestSyncCommandWithCache:
    """mcassets sync with a cache directory."""

    @patch("mcassets.cli.sync.sync_versions", new_callable=AsyncMock)
    def test_saves_after_sync(self, mock_sync: AsyncMock, tmp_path: Path):
        assets_dir = tmp_path / "assets"

        async def fake_sync(versions, assets_dir, **kwargs):
            _populate(assets_dir)
            return _result()

        mock_sync.side_effect = fake_sync
        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "sync",
                "-d",
                str(assets_dir),
                "--versions",
                "1.21.1",
                "--cache-dir",
                str(tmp_path / "cache"),
            ],
        )
        assert result.exit_code == 0, result.output
        key = cache_key("minecraft-assets", ["1.21.1"])
        assert DirectoryBlobCache(tmp_path / "cache").keys() == [key]

    @patch("mcassets.cli.sync.sync_versions", new_callable=AsyncMock)
    def test_exact_hit_skips_sync(self, mock_sync: AsyncMock, tmp_path: Path):
        source = tmp_path / "source"
        _populate(source)
        cache = DirectoryBlobCache(tmp_path / "cache")
        cache.save(source, cache_key("minecraft-assets", ["1.21.1"]))

        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "sync",
                "-d",
                str(tmp_path / "assets"),
                "--versions",
                "1.21.1",
                "--cache-dir",
                str(tmp_path / "cache"),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Nothing to do" in result.output
        mock_sync.assert_not_called()
        assert (tmp_path / "assets" / "indexes" / "17.json").exists()

    @patch("mcassets.cli.sync.sync_versions", new_callable=AsyncMock)
    def test_prefix_hit_restores_then_syncs(self, mock_sync: AsyncMock, tmp_path: Path):
        source = tmp_path / "source"
        _populate(source)
        cache = DirectoryBlobCache(tmp_path / "cache")
        cache.save(source, cache_key("minecraft-assets", ["1.20.6"]))
        mock_sync.return_value = _result()

        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "sync",
                "-d",
                str(tmp_path / "assets"),
                "--versions",
                "1.21.1",
                "--cache-dir",
                str(tmp_path / "cache"),
            ],
        )
        assert result.exit_code == 0, result.output
        mock_sync.assert_called_once()
        assert (tmp_path / "assets" / "indexes" / "17.json").exists()
        assert len(cache.keys()) == 2

    @patch("mcassets.cli.sync.sync_versions", new_callable=AsyncMock)
    def test_failure_does_not_save(self, mock_sync: AsyncMock, tmp_path: Path):
        mock_sync.side_effect = DownloadFailed("https://x/ab/abc", "size mismatch")
        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "sync",
                "-d",
                str(tmp_path / "assets"),
                "--versions",
                "1.21.1",
                "--cache-dir",
                str(tmp_path / "cache"),
            ],
        )
        assert result.exit_code == 1
        assert DirectoryBlobCache(tmp_path / "cache").keys() == []
