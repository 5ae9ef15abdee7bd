"""Local configuration file discovery.

Searches a directory and its parents for a module's configuration file,
in the same places a JavaScript toolchain would look:

- ``package.json`` property named after the module
- ``[tool.<module>]`` table in ``pyproject.toml``
- ``.<module>rc`` (YAML or JSON)
- ``.<module>rc.json``, ``.<module>rc.yaml``, ``.<module>rc.yml``
- ``<module>.config.json``, ``<module>.config.yaml``, ``<module>.config.yml``
"""

import json
import os
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

import toml
import yaml
from loguru import logger

try:
    from yaml import CLoader as YamlLoader
except ImportError:
    from yaml import Loader as YamlLoader

from ..errors import ConfigurationError
from ..models import ConfigResult


_MISSING = object()


class ConfigFileLocator:
    """Finds and parses configuration files for a module name."""

    def __init__(
        self,
        search_dir: Optional[Union[str, Path]] = None,
        stop_dir: Optional[Union[str, Path]] = None,
    ):
        """Initialize locator.

        Args:
            search_dir: Directory the search starts from (defaults to cwd)
            stop_dir: Last directory searched (defaults to the home directory)
        """
        self.search_dir = Path(search_dir or os.getcwd()).resolve()
        self.stop_dir = Path(stop_dir).resolve() if stop_dir else Path.home().resolve()

    def search_places(self, module_name: str) -> List[str]:
        """File names checked in every directory, in priority order."""
        return [
            "package.json",
            "pyproject.toml",
            f".{module_name}rc",
            f".{module_name}rc.json",
            f".{module_name}rc.yaml",
            f".{module_name}rc.yml",
            f"{module_name}.config.json",
            f"{module_name}.config.yaml",
            f"{module_name}.config.yml",
        ]

    def search_dirs(self) -> List[Path]:
        """Directories searched, starting at ``search_dir`` and walking up."""
        dirs = []
        current = self.search_dir

        while True:
            dirs.append(current)
            if current == self.stop_dir or current.parent == current:
                break
            current = current.parent

        return dirs

    def locate(self, module_name: str) -> Optional[ConfigResult]:
        """Find the configuration for ``module_name``.

        Args:
            module_name: Module name to search for

        Returns:
            ConfigResult with the parsed content, or None if nothing was found

        Raises:
            ConfigurationError: If a candidate file cannot be parsed
        """
        for directory in self.search_dirs():
            for place in self.search_places(module_name):
                path = directory / place
                if not path.is_file():
                    continue

                found, content = self.load_file(path, module_name)
                if not found:
                    continue

                logger.debug(f"Found {module_name} configuration at {path}")
                return ConfigResult(
                    config=content,
                    relative_path=os.path.relpath(path, self.search_dir),
                    file_path=path,
                )

        return None

    def open(self, module_name: str, error_message: str = "") -> Optional[ConfigResult]:
        """Locate a configuration, logging and swallowing parse failures.

        This is the handler bound to the config-open event on the host bus.

        Args:
            module_name: Module name to search for
            error_message: Message logged when loading fails

        Returns:
            ConfigResult or None
        """
        try:
            return self.locate(module_name)
        except ConfigurationError as e:
            message = error_message or f"Loading {module_name} configuration failed"
            logger.error(f"{message}\n{e}")
            return None

    def load_file(self, path: Path, module_name: str) -> Tuple[bool, Any]:
        """Parse a candidate file.

        Args:
            path: File to parse
            module_name: Module name, used for keyed files

        Returns:
            Tuple of (found, content). ``found`` is False for keyed files that
            do not carry the module key.
        """
        if path.name == "package.json":
            data = self._load_json(path)
            content = data.get(module_name, _MISSING) if isinstance(data, dict) else _MISSING
            return (content is not _MISSING, content)

        if path.name == "pyproject.toml":
            content = self._load_toml(path).get("tool", {}).get(module_name, _MISSING)
            return (content is not _MISSING, content)

        if path.suffix == ".json":
            return True, self._load_json(path)

        return True, self._load_yaml(path)

    def _load_yaml(self, path: Path) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = yaml.load(f, Loader=YamlLoader)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}", path=path, cause=e)

        return {} if content is None else content

    def _load_json(self, path: Path) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
            if not text.strip():
                return {}
            return json.loads(text)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {e}", path=path, cause=e)

    def _load_toml(self, path: Path) -> dict:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return toml.load(f)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigurationError(f"Invalid TOML in {path}: {e}", path=path, cause=e)
