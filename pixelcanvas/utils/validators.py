"""YAML config validation for the drawing scripts.

Provides pydantic models with fail-fast, path-aware error messages:
    - LoggingSettings: keyword arguments for logging_config.setup_logging()
    - CheckerboardConfig: checkerboard demo (configs/checkerboard.yaml)

Units:
    - Geometry: pixels
    - Colors: '#RRGGBB' text in YAML, packed uint32 after validation

Usage:
    from pixelcanvas.utils import validators
    cfg = validators.load_checkerboard_config("configs/checkerboard.yaml")
    canvas = Canvas.blank(cfg.size, cfg.size)
"""

from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from . import color, fs


class ConfigError(Exception):
    """Raised when a configuration file is missing or invalid."""


class LoggingSettings(BaseModel):
    """Subset of setup_logging() arguments settable from YAML."""
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[str] = None
    json_logs: bool = Field(False, alias="json")
    color: bool = True

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    def as_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for setup_logging()."""
        return {
            'log_level': self.log_level,
            'log_file': self.log_file,
            'json': self.json_logs,
            'color': self.color,
        }


class CheckerboardConfig(BaseModel):
    """Checkerboard demo settings.

    ``even_color`` doubles as the background color.
    """
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    size: int = Field(600, ge=1, le=16384, description="Canvas side length (px)")
    cell: int = Field(40, ge=1, description="Cell pitch (px)")
    even_color: int = Field(color.GRUVBOX_DARK['bg'], description="Packed color of even cells")
    odd_color: int = Field(color.GRUVBOX_DARK['fg'], description="Packed color of odd cells")
    output: Path = Field(Path("result.ppm"), description="PPM output path")
    png_output: Optional[Path] = Field(None, description="Optional PNG copy")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator('even_color', 'odd_color', mode='before')
    @classmethod
    def parse_color(cls, v: Any) -> Any:
        if isinstance(v, str):
            return color.parse_hex_color(v)
        return v

    @model_validator(mode='after')
    def validate_cell_fits(self) -> 'CheckerboardConfig':
        if self.cell > self.size:
            raise ValueError(f"cell={self.cell} larger than canvas size={self.size}")
        return self


def load_checkerboard_config(path: Union[str, Path], **overrides: Any) -> CheckerboardConfig:
    """Load and validate a checkerboard YAML file.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file
    **overrides : Any
        Top-level keys replacing file values (None values are ignored)

    Returns
    -------
    CheckerboardConfig

    Raises
    ------
    ConfigError
        File missing, unparsable, or failing validation
    """
    path = Path(path)
    try:
        raw = fs.load_yaml(path)
    except (FileNotFoundError, yaml.YAMLError) as e:
        raise ConfigError(str(e)) from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a mapping at top level, got {type(raw).__name__}")

    raw.update({k: v for k, v in overrides.items() if v is not None})
    return build_checkerboard_config(raw, source=str(path))


def build_checkerboard_config(raw: Dict[str, Any], source: str = "<dict>") -> CheckerboardConfig:
    """Validate an in-memory mapping; ``source`` names it in error messages."""
    try:
        return CheckerboardConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid checkerboard config in {source}:\n{e}") from e
