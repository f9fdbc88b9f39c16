import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from tomllib import load as toml_load
from typing import Final

_DIST_NAME: Final[str] = "hypestats"
_PROJECT_ABS_PATH: Final[Path] = Path(os.path.abspath(os.getenv("APP_DIR", Path(__file__).parent.parent)))
_PYPROJECT_TOML_FILEPATH: Final[Path] = _PROJECT_ABS_PATH / "pyproject.toml"
_UNKNOWN_VERSION: Final[str] = "0.0.0+unknown"


def get_project_version() -> str:
    """
    Returns the semver version of hypestats. Source checkouts read it from pyproject.toml,
    while non-editable installs fall back to the installed distribution's metadata.
    """
    if _PYPROJECT_TOML_FILEPATH.is_file():
        with open(_PYPROJECT_TOML_FILEPATH, "rb") as f:
            toml_data = toml_load(f)
        return toml_data["project"]["version"]
    try:
        return version(_DIST_NAME)
    except PackageNotFoundError:
        return _UNKNOWN_VERSION
