"""Sync configuration management."""

from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pbxsync.collector import DEFAULT_EXTENSIONS

DEFAULT_CONFIG_FILE = "pbxsync.json"


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or validated."""

    pass


class SyncConfig(BaseModel):
    """Everything a sync run needs to know, passed explicitly to the synchronizer."""

    model_config = ConfigDict(extra="forbid")

    project_path: Path = Field(..., description="The .xcodeproj bundle or its project.pbxproj")
    source_roots: list[Path] = Field(default_factory=list, description="Directories to scan")
    exclude_patterns: list[str] = Field(
        default_factory=list, description="Substrings that keep a path out of the project"
    )
    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS), description="Source file suffixes"
    )
    target_selector: str | None = Field(
        None, description="Name of the target to update; the first target when unset"
    )
    relation_root: Path | None = Field(
        None, description="Directory whose layout the group chain mirrors; the project dir when unset"
    )
    group_root: str = Field(
        "", description="Slash-separated group chain under the main group that receives files"
    )

    @property
    def group_root_segments(self) -> list[str]:
        return [segment for segment in self.group_root.split("/") if segment]

    def anchored(self, base_dir: Path) -> "SyncConfig":
        """Return a copy whose relative paths are anchored at ``base_dir``."""

        def anchor(path: Path) -> Path:
            return path if path.is_absolute() else base_dir / path

        return self.model_copy(
            update={
                "project_path": anchor(self.project_path),
                "source_roots": [anchor(root) for root in self.source_roots],
                "relation_root": anchor(self.relation_root) if self.relation_root else None,
            }
        )


def default_config() -> SyncConfig:
    """The hardcoded layout used when pbxsync runs without a config file.

    Paths are relative to the current directory (a ``scripts/`` folder next to
    the source trees).
    """
    return SyncConfig(
        project_path=Path("../prebuilt_ios/PredatorsIOS/PredatorsIOS.xcodeproj"),
        source_roots=[Path("../source_common"), Path("../source_ios")],
        exclude_patterns=["imgui", "main.cpp"],
        relation_root=Path(".."),
        group_root="PredatorsIOS",
    )


def load_config(path: str | Path | None = None) -> SyncConfig:
    """
    Load a configuration file, or the defaults when no path is given.

    Without a path, ``pbxsync.json`` in the current directory is used if it
    exists. Relative paths inside the file are resolved against the file's
    directory.

    Args:
        path: JSON file with ``SyncConfig`` fields

    Returns:
        The validated configuration

    Raises:
        ConfigError: If the file cannot be read or does not validate
    """
    if path is None:
        if not Path(DEFAULT_CONFIG_FILE).is_file():
            return default_config()
        path = DEFAULT_CONFIG_FILE

    path = Path(path)
    try:
        raw = path.read_text()
    except OSError as error:
        raise ConfigError(f"Cannot read config file {path}: {error}") from error

    try:
        config = SyncConfig.model_validate_json(raw)
    except ValidationError as error:
        raise ConfigError(f"Invalid config file {path}: {error}") from error

    logger.debug(f"Loaded config from {path}")
    return config.anchored(path.parent.absolute())
