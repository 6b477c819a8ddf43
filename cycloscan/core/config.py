"""
Configuration for cycloscan.

Defaults live in ``DEFAULT_CONFIG``; a YAML or JSON file is deep-merged over
them. Example ``.cycloscan.yaml``:

```yaml
frontend:
  name: clang
  clang_args: ["-std=c11", "-Iinclude"]
exclusion:
  header_extensions: [".h", ".hpp"]
report:
  path: "reports/{stem}.cy"
diagnostics:
  enabled: false
```
"""

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from cycloscan.core.errors import ConfigError


CONFIG_FILE_NAMES = [
    ".cycloscan.yaml",
    ".cycloscan.yml",
    ".cycloscan.json",
]

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": 1,
    "frontend": {
        "name": "treesitter",
        "clang_args": [],
    },
    "exclusion": {
        "header_extensions": [".h", ".hpp", ".hh", ".hxx", ".h++", ".inc"],
        "system_include_dirs": ["/usr/include", "/usr/local/include"],
    },
    "report": {
        "path": "results.cy",
    },
    "diagnostics": {
        "enabled": True,
        "color": True,
    },
    "output": {
        "format": "text",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config_file(path: str) -> Dict[str, Any]:
    """Read a YAML or JSON config file into a dict."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    raw = config_path.read_text(encoding="utf-8")
    try:
        if config_path.suffix.lower() == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


@dataclass(frozen=True)
class Config:
    data: Dict[str, Any]

    @classmethod
    def default(cls) -> "Config":
        return cls(copy.deepcopy(DEFAULT_CONFIG))

    @classmethod
    def load(cls, path: Optional[str]) -> "Config":
        if not path:
            return cls.default()
        return cls.from_dict(load_config_file(path))

    @classmethod
    def from_dict(cls, overrides: Dict[str, Any]) -> "Config":
        return cls(_deep_merge(copy.deepcopy(DEFAULT_CONFIG), overrides))

    def with_overrides(self, overrides: Dict[str, Any]) -> "Config":
        return Config(_deep_merge(self.data, overrides))

    def frontend_name(self) -> str:
        return self.data.get("frontend", {}).get("name", "treesitter")

    def frontend_options(self) -> Dict[str, Any]:
        return self.data.get("frontend", {})

    def header_extensions(self) -> List[str]:
        return list(self.data.get("exclusion", {}).get("header_extensions", []))

    def system_include_dirs(self) -> List[str]:
        return list(self.data.get("exclusion", {}).get("system_include_dirs", []))

    def report_path(self) -> Optional[str]:
        return self.data.get("report", {}).get("path")

    def diagnostics_enabled(self) -> bool:
        return bool(self.data.get("diagnostics", {}).get("enabled", True))

    def diagnostics_color(self) -> bool:
        return bool(self.data.get("diagnostics", {}).get("color", True))

    def output_format(self) -> str:
        return self.data.get("output", {}).get("format", "text")


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.exists():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def create_default_config() -> str:
    """Render the default configuration as YAML."""
    return yaml.safe_dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False)
