"""Environment variable configuration loading.

Reads CONVERSION_GEN_* variables and coerces them through the settings
schema.
"""

import os
from typing import Any

from pydantic import ValidationError

from .schema import GeneratorSettings

ENV_PREFIX = "CONVERSION_GEN_"


class EnvironmentConfigLoader:
    """Loads configuration from CONVERSION_GEN_* environment variables."""

    def env_var_names(self) -> dict[str, str]:
        """Map each environment variable name to its settings field."""
        return {
            f"{ENV_PREFIX}{field.upper()}": field
            for field in GeneratorSettings.model_fields
        }

    def load_env_config(self) -> dict[str, Any]:
        """Load configuration from environment variables.

        Returns:
            Dictionary of configuration values found in the environment.
            Only includes fields that are actually set (not defaults).

        Raises:
            ValueError: If environment variables contain invalid values.
        """
        env_values = {
            field: os.environ[env_var]
            for env_var, field in self.env_var_names().items()
            if env_var in os.environ
        }
        if not env_values:
            return {}

        try:
            settings = GeneratorSettings(**env_values)
        except ValidationError as e:
            raise ValueError(f"Invalid environment configuration: {e}") from e

        return {field: getattr(settings, field) for field in env_values}

    def get_env_summary(self) -> dict[str, str]:
        """Return the CONVERSION_GEN_* variables currently set."""
        return {
            key: value
            for key, value in sorted(os.environ.items())
            if key.startswith(ENV_PREFIX)
        }
