"""
Named resource loading.

Resources are read as a single text blob. Loaders are injected into the
processing facade so tests can substitute in-memory fixtures.
"""

from collections.abc import Mapping
from importlib import resources
from pathlib import Path
from typing import Protocol, runtime_checkable

from recordflow.config.settings import ProcessingConfig
from recordflow.errors import NotFoundError
from recordflow.utils.logging import get_logger

log = get_logger(__name__)


@runtime_checkable
class ResourceLoader(Protocol):
    """Reads a named resource as text."""

    def load(self, name: str) -> str:
        """
        Read resource ``name``.

        Raises:
            NotFoundError: If the resource does not exist.
        """
        ...


class PackageResourceLoader:
    """Loads resources bundled inside an importable package."""

    def __init__(self, package: str = "recordflow.data", encoding: str = "utf-8") -> None:
        self.package = package
        self.encoding = encoding

    def load(self, name: str) -> str:
        """Read a packaged resource."""
        try:
            resource = resources.files(self.package).joinpath(name)
            text = resource.read_text(encoding=self.encoding)
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError, ModuleNotFoundError) as e:
            raise NotFoundError(name) from e
        log.debug("Loaded packaged resource", package=self.package, resource=name)
        return text


class DirectoryResourceLoader:
    """Loads resources from a directory on disk."""

    def __init__(self, root: Path, encoding: str = "utf-8") -> None:
        self.root = Path(root)
        self.encoding = encoding

    def resolve_path(self, name: str) -> Path:
        """
        Resolve a resource name against the root directory.

        Args:
            name: Resource name relative to the root.

        Returns:
            Absolute path.

        Raises:
            NotFoundError: If the name escapes the root directory.
        """
        root = self.root.resolve()
        path = (root / name).resolve()
        if not path.is_relative_to(root):
            raise NotFoundError(name)
        return path

    def load(self, name: str) -> str:
        """Read a resource file below the root directory."""
        path = self.resolve_path(name)
        if not path.is_file():
            raise NotFoundError(name)
        log.debug("Loaded resource file", path=str(path))
        return path.read_text(encoding=self.encoding)


class MappingResourceLoader:
    """Serves resources from an in-memory mapping of name to text."""

    def __init__(self, documents: Mapping[str, str]) -> None:
        self.documents = dict(documents)

    def load(self, name: str) -> str:
        """Return the text registered under ``name``."""
        try:
            return self.documents[name]
        except KeyError as e:
            raise NotFoundError(name) from e


def build_loader(config: ProcessingConfig) -> ResourceLoader:
    """
    Create the resource loader described by the configuration.

    A configured resource root selects the directory loader; otherwise
    resources are read from the configured package.
    """
    settings = config.resources
    if settings.root is not None:
        return DirectoryResourceLoader(settings.root, encoding=settings.encoding)
    return PackageResourceLoader(settings.package, encoding=settings.encoding)
