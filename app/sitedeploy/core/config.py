"""Pipeline configuration.

This module defines the Pydantic models for the optional
``sitedeploy.toml`` project file and the function that loads it.
Every field has a default, so a project without the file runs the
standard pipeline.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sitedeploy.core.paths import get_project_config_path

logger = logging.getLogger(__name__)

DEFAULT_CLEANUP_PATTERNS: tuple[str, ...] = (
    # Temporary files
    ".DS_Store",
    "Thumbs.db",
    # Development environment files
    ".env.local",
    ".env.development",
    # Build caches
    "node_modules/.cache",
    # Log files
    "npm-debug.log",
    "yarn-debug.log",
    "yarn-error.log",
    # Test artifacts
    "coverage/",
    "__tests__/",
    "*.test.js",
    "*.spec.js",
    # Backups
    "*.bak",
    "*~",
    # Draft content
    "content/drafts/",
)

DEFAULT_SCAN_DIRECTORIES: tuple[str, ...] = (
    "public/images",
    "src/components",
    "src/pages",
    "src/styles",
)

DEFAULT_SCAN_EXTENSIONS: tuple[str, ...] = ("js", "jsx", "ts", "tsx")

DEFAULT_SCAN_EXCLUDE_DIRS: tuple[str, ...] = ("node_modules", ".git")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file is not valid TOML."""


class ConfigValidationError(ConfigError):
    """Raised when the config content does not match the schema."""


class CleanupConfig(BaseModel):
    """Cleanup stage settings.

    Attributes:
        patterns: Ordered cleanup patterns. A trailing ``/`` marks a
            directory, ``*`` marks a glob, anything else is an exact path.
    """

    model_config = ConfigDict(extra="forbid")

    patterns: Annotated[
        list[str],
        Field(description="Cleanup patterns relative to the project directory"),
    ] = list(DEFAULT_CLEANUP_PATTERNS)


class ScanConfig(BaseModel):
    """Unused-asset scan settings."""

    model_config = ConfigDict(extra="forbid")

    directories: Annotated[
        list[str],
        Field(description="Directories whose files are checked for references"),
    ] = list(DEFAULT_SCAN_DIRECTORIES)
    extensions: Annotated[
        list[str],
        Field(description="Source file extensions searched for imports"),
    ] = list(DEFAULT_SCAN_EXTENSIONS)
    exclude_dirs: Annotated[
        list[str],
        Field(description="Directory names skipped by the search"),
    ] = list(DEFAULT_SCAN_EXCLUDE_DIRS)


class OptimizeConfig(BaseModel):
    """Asset optimization settings."""

    model_config = ConfigDict(extra="forbid")

    image_dir: Annotated[str, Field(description="Image directory optimized in place")] = (
        "public/images"
    )
    styles_dir: Annotated[str, Field(description="Stylesheet directory to minify")] = (
        "public/styles"
    )
    image_tool: Annotated[str, Field(description="Image optimizer executable")] = "imagemin"
    install_command: Annotated[
        list[str],
        Field(description="Command that installs the image optimizer"),
    ] = ["npm", "install", "-g", "imagemin-cli"]
    skip_css_env: Annotated[
        str,
        Field(description="Environment variable that disables CSS minification"),
    ] = "SKIP_CSS_MINIFY"


class BuildConfig(BaseModel):
    """Build stage settings."""

    model_config = ConfigDict(extra="forbid")

    manifest: Annotated[str, Field(description="Package manifest declaring build scripts")] = (
        "package.json"
    )


class PipelineConfig(BaseModel):
    """Complete pipeline configuration."""

    model_config = ConfigDict(extra="forbid")

    cleanup: CleanupConfig = Field(default_factory=CleanupConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    optimize: OptimizeConfig = Field(default_factory=OptimizeConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)


def load_config(project_dir: Path) -> PipelineConfig:
    """Load the project configuration, falling back to defaults.

    Args:
        project_dir: Root directory of the site project.

    Returns:
        Validated PipelineConfig. Defaults when no config file exists.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file exists but cannot be read.
    """
    config_path = get_project_config_path(project_dir)

    if not config_path.exists():
        logger.debug("No %s found, using defaults", config_path)
        return PipelineConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {config_path}: {e}") from e

    try:
        config = PipelineConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {config_path}: {e}") from e

    logger.debug("Loaded configuration from %s", config_path)
    return config


def require_config(project_dir: Path) -> PipelineConfig:
    """Load configuration or exit with a helpful error message.

    Args:
        project_dir: Root directory of the site project.

    Returns:
        Loaded and validated PipelineConfig.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    import typer

    from sitedeploy.utils.formatting import print_error

    try:
        return load_config(project_dir)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def save_config(config: PipelineConfig, project_dir: Path) -> Path:
    """Write a configuration to the project's ``sitedeploy.toml``.

    The file is written atomically by first writing to a temporary file
    in the same directory and then renaming it into place.

    Args:
        config: Configuration to save.
        project_dir: Root directory of the site project.

    Returns:
        Path where the configuration was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = get_project_config_path(project_dir)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write {config_path}: {e}") from e

    return config_path
