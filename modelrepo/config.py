"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Project config (.modelrepo/config.yaml)
  2. User config (~/.modelrepo/config.yaml)
  3. Environment variables
  4. Defaults
"""

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from .presentation.symbols import get_symbols


logger = logging.getLogger(__name__)


UNRESOLVED_POLICIES = ("restore", "delete")
DEFAULT_UNRESOLVED_POLICY = "restore"


@dataclass
class RepositoryConfig:
    """Where history is read from and what to do with unresolved references."""
    branch: Optional[str] = None  # None = master, main, then HEAD
    unresolved: str = DEFAULT_UNRESOLVED_POLICY  # "restore" | "delete"

    @property
    def effective_branch(self) -> str:
        return self.branch or "auto (master, main, HEAD)"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.unresolved not in UNRESOLVED_POLICIES:
            return f"Unknown unresolved policy '{self.unresolved}'. Valid: {', '.join(UNRESOLVED_POLICIES)}"
        if self.branch is not None and not self.branch.strip():
            return "Branch cannot be empty. Unset it to auto-detect."
        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        valid_symbols = ("unicode", "ascii", "auto")
        if self.symbols not in valid_symbols:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(valid_symbols)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "repository": {
                "branch": self.repository.branch,
                "unresolved": self.repository.unresolved
            },
            "display": {
                "symbols": self.display.symbols
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        repo_data = data.get("repository", {}) or {}
        display_data = data.get("display", {}) or {}

        return cls(
            repository=RepositoryConfig(
                branch=repo_data.get("branch"),
                unresolved=repo_data.get("unresolved", DEFAULT_UNRESOLVED_POLICY)
            ),
            display=DisplayConfig(
                symbols=display_data.get("symbols", "auto")
            )
        )


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Project config (.modelrepo/config.yaml)
      2. User config (~/.modelrepo/config.yaml)
      3. Environment
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".modelrepo"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".modelrepo"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: Environment (lowest of the explicit sources)
        if os.environ.get("MODELREPO_BRANCH"):
            config_data.setdefault("repository", {})["branch"] = os.environ["MODELREPO_BRANCH"]
        if os.environ.get("MODELREPO_UNRESOLVED"):
            config_data.setdefault("repository", {})["unresolved"] = os.environ["MODELREPO_UNRESOLVED"]

        # Layer 2: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 3: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        self._config = Config.from_dict(config_data)
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring malformed config %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: not a mapping", path)
            return {}
        return data

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self.project_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.project_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self.user_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.user_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "repository.branch")
            value: Value to set ("" or "auto" unsets the branch)
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'repository.branch')"

        section, setting = parts

        if section == "repository":
            if setting == "branch":
                config.repository.branch = None if value in ("", "auto") else value
            elif setting == "unresolved":
                config.repository.unresolved = value
            else:
                return f"Unknown repository setting: {setting}. Valid: branch, unresolved"
            error = config.repository.validate()
            if error:
                self._config = None
                return error

        elif section == "display":
            if setting == "symbols":
                config.display.symbols = value
            else:
                return f"Unknown display setting: {setting}. Valid: symbols"
            error = config.display.validate()
            if error:
                self._config = None
                return error
        else:
            return f"Unknown section: {section}. Valid: repository, display"

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)

        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return None

        section, setting = parts

        if section == "repository":
            if setting == "branch":
                return config.repository.branch
            elif setting == "unresolved":
                return config.repository.unresolved
        elif section == "display":
            if setting == "symbols":
                return config.display.symbols

        return None

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()
        symbols = get_symbols(config.display.symbols)

        lines = [
            "Repository:",
            f"  Branch: {config.repository.effective_branch}",
            f"  Unresolved references: {config.repository.unresolved}",
        ]

        error = config.repository.validate() or config.display.validate()
        if error:
            lines.append(f"  {symbols.check_fail} {error}")

        lines.extend([
            "",
            "Display:",
            f"  Symbols: {config.display.symbols}",
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ])

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
