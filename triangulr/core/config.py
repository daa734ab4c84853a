"""Configuration for the triangulr command-line interface.

Configuration files are JSON or YAML mappings; every key is optional.

Example (YAML)::

    min: 10
    max: 40
    mode: 20
    seed: 42
    precision: 4
    log_level: INFO
"""

import json
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, field_validator, model_validator

from .distributions import TriangularDistribution

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TriangulrConfig(BaseModel):
    """Defaults applied when the CLI is not given explicit values."""
    min: float = 0.0
    max: float = 1.0
    mode: float = 0.5
    seed: Optional[int] = None
    precision: int = 6
    log_level: str = "WARNING"
    structured_logging: bool = False

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v}")
        return v

    @field_validator('precision')
    @classmethod
    def validate_precision(cls, v):
        if v < 0:
            raise ValueError("precision must be non-negative")
        return v

    @model_validator(mode='after')
    def validate_distribution(self):
        TriangularDistribution(min=self.min, max=self.max, mode=self.mode)
        return self

    @property
    def distribution(self) -> TriangularDistribution:
        return TriangularDistribution(min=self.min, max=self.max, mode=self.mode)


def load_config(file_path: Optional[Union[str, Path]] = None) -> TriangulrConfig:
    """Load configuration from a JSON or YAML file, or return defaults.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file type is unsupported or its content is not a mapping
    """
    if not file_path:
        return TriangulrConfig()

    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    suffix = path.suffix.lower()
    with open(path, 'r', encoding='utf-8') as f:
        if suffix == '.json':
            data = json.load(f)
        elif suffix in ('.yaml', '.yml'):
            data = yaml.safe_load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(data).__name__}")

    return TriangulrConfig(**data)
