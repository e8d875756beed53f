"""JSON configuration file loading utilities."""

import json
from pathlib import Path
from typing import Any, Dict

from ..errors import ConfigurationError


class JsonConfigLoader:
    """Loads flat ``NAME -> value`` maps from JSON files for environment defaults."""

    @staticmethod
    def load_from_file(path: Path) -> Dict[str, str]:
        """
        Load configuration from a JSON file, normalizing values to strings.

        Missing files yield an empty mapping.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        if not path.exists():
            return {}

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Failed to parse JSON config {path}") from exc
        except OSError as exc:  # pragma: no cover - filesystem access failure
            raise ConfigurationError(f"Failed to read {path}") from exc

        if not isinstance(payload, dict):
            raise ConfigurationError(f"JSON config {path} must contain an object at the top level")

        return JsonConfigLoader._normalize_values(payload, path)

    @staticmethod
    def _normalize_values(payload: Dict[str, Any], path: Path) -> Dict[str, str]:
        normalized: Dict[str, str] = {}

        for key, value in payload.items():
            if isinstance(value, (dict, list)):
                raise ConfigurationError(f"JSON config {path} must map environment names to scalar values (problematic key: {key})")

            if value is None:
                normalized[str(key)] = ""
            elif isinstance(value, bool):
                normalized[str(key)] = "true" if value else "false"
            else:
                normalized[str(key)] = str(value)

        return normalized
