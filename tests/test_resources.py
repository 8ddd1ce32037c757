"""Tests for named resource loaders."""

from pathlib import Path

import pytest

from recordflow.config.settings import ProcessingConfig, ResourceConfig
from recordflow.errors import NotFoundError
from recordflow.ingestion.resources import (
    DirectoryResourceLoader,
    MappingResourceLoader,
    PackageResourceLoader,
    ResourceLoader,
    build_loader,
)


class TestPackageResourceLoader:
    """Tests for packaged resources."""

    def test_loads_sample(self) -> None:
        """Test that the bundled sample CSV is readable."""
        text = PackageResourceLoader().load("data.csv")
        assert text.startswith("id,value,category,region")

    def test_missing_resource(self) -> None:
        """Test that a missing resource is NotFound."""
        with pytest.raises(NotFoundError) as exc_info:
            PackageResourceLoader().load("nonexistent")
        assert exc_info.value.resource == "nonexistent"
        assert str(exc_info.value) == "File not found: nonexistent"

    def test_missing_package(self) -> None:
        """Test that an unknown package is NotFound."""
        with pytest.raises(NotFoundError):
            PackageResourceLoader("recordflow.no_such_package").load("data.csv")

    def test_is_resource_loader(self) -> None:
        """Test that the loader satisfies the protocol."""
        assert isinstance(PackageResourceLoader(), ResourceLoader)


class TestDirectoryResourceLoader:
    """Tests for directory-backed resources."""

    def test_loads_file(self, tmp_path: Path) -> None:
        """Test reading a file below the root."""
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "a.csv").write_text("id,value\n", encoding="utf-8")
        loader = DirectoryResourceLoader(tmp_path)
        assert loader.load("sub/a.csv") == "id,value\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file is NotFound."""
        with pytest.raises(NotFoundError):
            DirectoryResourceLoader(tmp_path).load("missing.csv")

    def test_directory_is_not_a_resource(self, tmp_path: Path) -> None:
        """Test that a directory name is NotFound."""
        (tmp_path / "sub").mkdir()
        with pytest.raises(NotFoundError):
            DirectoryResourceLoader(tmp_path).load("sub")

    @pytest.mark.parametrize("name", ["../outside.csv", "sub/../../outside.csv"])
    def test_escape_is_rejected(self, tmp_path: Path, name: str) -> None:
        """Test that names may not leave the root directory."""
        root = tmp_path / "root"
        root.mkdir()
        (tmp_path / "outside.csv").write_text("secret", encoding="utf-8")
        with pytest.raises(NotFoundError):
            DirectoryResourceLoader(root).load(name)

    def test_encoding(self, tmp_path: Path) -> None:
        """Test that the configured encoding is used."""
        (tmp_path / "a.csv").write_bytes("Bücher".encode("latin-1"))
        assert DirectoryResourceLoader(tmp_path, encoding="latin-1").load("a.csv") == "Bücher"


class TestMappingResourceLoader:
    """Tests for in-memory resources."""

    def test_loads_document(self) -> None:
        """Test that registered documents are returned."""
        assert MappingResourceLoader({"a": "text"}).load("a") == "text"

    def test_missing_document(self) -> None:
        """Test that unregistered names are NotFound."""
        with pytest.raises(NotFoundError):
            MappingResourceLoader({}).load("a")

    def test_copies_mapping(self) -> None:
        """Test that later changes to the source mapping are not seen."""
        documents = {"a": "text"}
        loader = MappingResourceLoader(documents)
        documents["a"] = "changed"
        assert loader.load("a") == "text"


class TestBuildLoader:
    """Tests for build_loader."""

    def test_default_is_package(self) -> None:
        """Test that the default configuration reads packaged resources."""
        loader = build_loader(ProcessingConfig())
        assert isinstance(loader, PackageResourceLoader)
        assert loader.package == "recordflow.data"

    def test_root_selects_directory(self, tmp_path: Path) -> None:
        """Test that a configured root reads from disk."""
        config = ProcessingConfig(resources=ResourceConfig(root=tmp_path, encoding="latin-1"))
        loader = build_loader(config)
        assert isinstance(loader, DirectoryResourceLoader)
        assert loader.root == tmp_path
        assert loader.encoding == "latin-1"
