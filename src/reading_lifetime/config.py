"""
reading_lifetime/config.py - Estimator Configuration

Pydantic model holding the tunable assumptions of the estimator. Values can
come from a dict, a JSON file, or command-line overrides.

Author: Reading Lifetime Project
License: MIT
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when an estimator configuration cannot be parsed."""


class EstimatorConfig(BaseModel):
    """Estimator assumptions."""

    # Path to a life-expectancy JSON dataset; None uses the bundled one
    table_path: Optional[str] = Field(
        default=None,
        description="Life expectancy dataset (JSON)"
    )

    # When set, remaining years = expected_age - current_age (no table lookup)
    expected_age: Optional[float] = Field(
        default=None,
        ge=0,
        description="Fixed expected age overriding the table"
    )

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "EstimatorConfig":
        try:
            return cls(**(config or {}))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid estimator configuration: {e}") from e

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> "EstimatorConfig":
        path = Path(filepath)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigurationError(f"Configuration {path} must be a JSON object")

        logger.info(f"Loaded estimator configuration from {path}")
        return cls.from_dict(raw)

    def with_overrides(self, **overrides: Any) -> "EstimatorConfig":
        """Copy of this config with the non-None overrides applied."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return self.from_dict(values)
