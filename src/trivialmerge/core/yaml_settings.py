"""YAML settings source with include: directive support."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import yaml
from platformdirs import user_config_dir
from pydantic_settings import BaseSettings, YamlConfigSettingsSource

from trivialmerge.core.log import logger

CONFIG_FILENAME = "trivialmerge.yaml"
DEFAULTS_FILE = Path(__file__).parent.parent / "defaults" / "default.yaml"


def cli_includes(argv: list[str]) -> list[str]:
    """Values of every --include option in argv."""
    includes = []
    i = 1
    while i < len(argv):
        if argv[i] == "--include" and i + 1 < len(argv):
            includes.append(argv[i + 1])
            i += 1
        elif argv[i].startswith("--include="):
            includes.append(argv[i].split("=", 1)[1])
        i += 1
    return includes


def deep_merge(base: dict, override: dict) -> dict:
    """Merge override into a copy of base, recursing into dicts."""
    result = base.copy()
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class YamlWithIncludesSettingsSource(YamlConfigSettingsSource):
    """Layered YAML configuration.

    Files are deep-merged in this order, later ones winning: the user
    config directory, ./trivialmerge.yaml, then any --include files
    from the command line. Each file may pull in others with an
    include: key, resolved relative to itself. Package defaults are a
    separate, lowest-priority source (PackageDefaultsSettingsSource).
    """

    def __init__(
        self, settings_cls: type[BaseSettings], yaml_file=None
    ):
        includes = cli_includes(sys.argv)
        base = yaml_file or settings_cls.model_config.get("yaml_file")
        if base and includes:
            yaml_file = (
                [base] if isinstance(base, (str, os.PathLike)) else list(base)
            ) + includes
        elif includes:
            yaml_file = includes
        else:
            yaml_file = base

        super().__init__(settings_cls, yaml_file)

    def _read_files(self, files, **kwargs):
        files_to_load = [
            Path(user_config_dir("trivialmerge", appauthor=False))
            / CONFIG_FILENAME,
        ]

        if files:
            if isinstance(files, (str, os.PathLike)):
                files = [files]
            files_to_load.extend(Path(f).expanduser() for f in files)

        result = {}
        for file_path in files_to_load:
            if file_path.is_file():
                logger.debug(
                    "Loading configuration", file=str(file_path)
                )
                data = self._load_file_recursive(file_path, set())
                result = deep_merge(result, data)
            else:
                logger.debug(
                    "Configuration file not found (skipping)",
                    file=str(file_path),
                )

        return result

    def _load_file_recursive(
        self, filepath: Path, visited: set[Path]
    ) -> dict:
        """Load one YAML file with its include: directives applied.

        Included files are merged underneath the including file, so
        the including file's own keys win.

        Raises:
            ValueError: If a file includes itself, directly or not
        """
        filepath = filepath.resolve()
        if filepath in visited:
            raise ValueError(f"Circular include: {filepath}")
        visited.add(filepath)

        with open(filepath, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        includes = data.pop("include", None) or []
        if isinstance(includes, str):
            includes = [includes]

        merged: dict = {}
        for inc in includes:
            inc_path = Path(inc).expanduser()
            if not inc_path.is_absolute():
                inc_path = filepath.parent / inc_path
            merged = deep_merge(
                merged, self._load_file_recursive(inc_path, visited.copy())
            )

        return deep_merge(merged, data)


class PackageDefaultsSettingsSource(YamlWithIncludesSettingsSource):
    """defaults/default.yaml shipped with the package.

    Sits below the environment so TRIVIALMERGE_* variables can
    override any key it sets.
    """

    def __init__(self, settings_cls: type[BaseSettings]):
        YamlConfigSettingsSource.__init__(self, settings_cls, DEFAULTS_FILE)

    def _read_files(self, files, **kwargs):
        logger.debug("Loading package defaults", file=str(DEFAULTS_FILE))
        return self._load_file_recursive(DEFAULTS_FILE, set())
