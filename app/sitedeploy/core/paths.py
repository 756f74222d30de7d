"""Path management for sitedeploy.

Project-relative paths (config file, package manifest) and the
XDG-compliant user configuration directory used for theme overrides.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "sitedeploy"

# Project configuration file, looked up in the project directory
PROJECT_CONFIG_NAME = "sitedeploy.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the user configuration directory path.

    Returns:
        Path to ~/.config/sitedeploy/ (or XDG_CONFIG_HOME/sitedeploy/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/sitedeploy/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_project_config_path(project_dir: Path) -> Path:
    """Get the project configuration file path.

    Args:
        project_dir: Root directory of the site project.

    Returns:
        Path to <project_dir>/sitedeploy.toml.
    """
    return project_dir / PROJECT_CONFIG_NAME


def is_within(path: Path, root: Path, *, allow_root: bool = False) -> bool:
    """Check whether a path lies inside root.

    Paths are normalized lexically (``..`` collapsed) without following
    symlinks. Resolve both arguments first to compare real locations.

    Args:
        path: Path to check.
        root: Directory that must contain the path.
        allow_root: Whether root itself counts as inside.

    Returns:
        True if path is a descendant of root, or root itself when
        allow_root is set.
    """
    path_abs = Path(os.path.abspath(path))
    root_abs = Path(os.path.abspath(root))
    if path_abs == root_abs:
        return allow_root
    return root_abs in path_abs.parents
