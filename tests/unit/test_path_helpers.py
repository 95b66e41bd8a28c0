"""Unit tests for path helper functions."""

from pathlib import Path

from neutron_deployments.paths import (
    get_default_storage_dir,
    get_deployment_path,
    get_storage_path,
)


class TestGetDefaultStorageDir:
    """Test the get_default_storage_dir function."""

    def test_returns_path_in_working_directory(self, tmp_path: Path, monkeypatch):
        """Test that default storage dir is in the current directory."""
        monkeypatch.chdir(tmp_path)
        storage_dir = get_default_storage_dir()

        assert isinstance(storage_dir, Path)
        assert storage_dir.name == ".neutron-deployments"
        assert storage_dir.parent == Path.cwd()

    def test_returns_absolute_path(self):
        assert get_default_storage_dir().is_absolute()

    def test_consistent_across_calls(self):
        assert get_default_storage_dir() == get_default_storage_dir()


class TestGetStoragePath:
    """Test the get_storage_path function."""

    def test_default_filename(self):
        assert get_storage_path().name == "local_storage.json"

    def test_default_in_storage_dir(self):
        assert get_storage_path().parent == get_default_storage_dir()

    def test_custom_storage_root(self, tmp_path: Path):
        custom_root = tmp_path / "custom"
        assert get_storage_path(custom_root) == custom_root / "local_storage.json"

    def test_custom_storage_root_as_string(self, tmp_path: Path):
        custom_root = str(tmp_path / "string_storage")
        assert get_storage_path(custom_root).parent == Path(custom_root)

    def test_relative_custom_root_converted_to_absolute(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = get_storage_path("relative_storage")

        assert path.is_absolute()
        assert path.parent == tmp_path / "relative_storage"


class TestGetDeploymentPath:
    """Test the get_deployment_path function."""

    def test_filename_includes_network(self, tmp_path: Path):
        path = get_deployment_path("neutron-testnet", tmp_path)
        assert path.name == "deployment-neutron-testnet.json"
        assert path.parent == tmp_path

    def test_defaults_to_working_directory(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = get_deployment_path("neutron-testnet")
        assert path.parent == Path.cwd()

    def test_relative_output_dir_converted_to_absolute(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = get_deployment_path("neutron-testnet", "out")

        assert path.is_absolute()
        assert path == tmp_path / "out" / "deployment-neutron-testnet.json"
