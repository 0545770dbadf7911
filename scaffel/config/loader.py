# scaffel/config/loader.py
"""
Configuration loading.

Tool settings live in the platformdirs user config directory and are
auto-created with defaults. Project files are YAML or JSON (JSON is
parsed by the same YAML loader).
"""

import logging
from pathlib import Path

import yaml
from platformdirs import user_config_path
from pydantic import ValidationError as PydanticValidationError

from scaffel.errors import ConfigurationError, FileSystemError

from .schema import ProjectConfig, ScaffelSettings

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    """Get path to config file, ensuring config directory exists."""
    config_dir = user_config_path("scaffel", ensure_exists=True)
    return config_dir / "config.yaml"


def _format_errors(exc: PydanticValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]


def load_settings(path: Path | None = None) -> ScaffelSettings:
    """
    Load tool settings from YAML.

    If the file doesn't exist, creates it with defaults.

    Args:
        path: Settings file (defaults to the user config directory)

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        default_settings = ScaffelSettings()
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with config_path.open("w") as f:
                yaml.safe_dump(
                    default_settings.model_dump(mode="json"),
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                )
            logger.info(f"Created default config at {config_path}")
        except OSError as e:
            logger.warning(f"Could not write default config to {config_path}: {e}")
        return default_settings

    try:
        with config_path.open("r") as f:
            data = yaml.safe_load(f) or {}
        settings = ScaffelSettings(**data)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid settings in {config_path}: {'; '.join(_format_errors(e))}"
        ) from e

    logger.info(f"Loaded config from {config_path}")
    return settings


def parse_project_file(path: str | Path) -> ProjectConfig:
    """
    Parse a YAML or JSON project file.

    Raises:
        FileSystemError: If the file does not exist or cannot be read
        ConfigurationError: If it is not valid YAML/JSON or lacks a product name
    """
    project_path = Path(path).resolve()
    if not project_path.is_file():
        raise FileSystemError(f"Config file not found: {project_path}", str(project_path))

    try:
        data = yaml.safe_load(project_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise FileSystemError(f"Cannot read {project_path}: {e}", str(project_path)) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid project file {project_path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("product"), dict):
        raise ConfigurationError("Config must have a product with a name")

    try:
        project = ProjectConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid project file {project_path}: {'; '.join(_format_errors(e))}"
        ) from e

    logger.info(f"Loaded project '{project.product.name}' with {len(project.features)} features")
    return project
