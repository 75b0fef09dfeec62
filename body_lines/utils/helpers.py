import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

# Keys accepted in ``key=value`` configuration files and how their values are parsed.
CONFIG_FILE_KEYS: Dict[str, Callable[[str], Any]] = {
    "ground_level": float,
    "body_x": float,
    "body_y": float,
    "body_preset": str,
    "target_x": float,
    "target_y": float,
    "target_radius": float,
    "snowball_target_x": float,
    "snowball_target_y": float,
    "gravity": float,
    "walk_speed": float,
    "reach_distance": float,
    "snowball_radius": float,
    "throw_standoff": float,
    "flight_time_step": float,
    "simulation_type": str,
    "auto_step_interval": float,
}


def load_scenarios(json_path: Path) -> dict:
    """Loads scenario configurations from a JSON file.

    Args:
        json_path (Path): Path (or importlib resource) pointing to the JSON file.

    Returns:
        dict: A dictionary of scenario configurations keyed by scenario name.

    Raises:
        RuntimeError: If an error occurs while opening or parsing the JSON file.
    """
    try:
        with json_path.open("r") as f:
            return json.load(f)
    except Exception as e:
        raise RuntimeError(f"Error loading {json_path}: {e}")


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """Reads a ``key=value`` configuration file.

    Blank lines and lines starting with ``#`` are ignored, as is whitespace around keys
    and values. Unknown keys and unparsable values are skipped with a warning.

    Args:
        config_path (Path): Path to the configuration file.

    Returns:
        Dict[str, Any]: Parsed settings, using the keys of ``CONFIG_FILE_KEYS``.

    Raises:
        RuntimeError: If the file cannot be read.
    """
    config_path = Path(config_path)
    try:
        lines = config_path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise RuntimeError(f"Error loading {config_path}: {e}")

    settings: Dict[str, Any] = {}
    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            logger.warning("%s:%d: expected key=value, got '%s'", config_path, line_number, line)
            continue
        key, value = (part.strip() for part in line.split("=", 1))
        parser = CONFIG_FILE_KEYS.get(key)
        if parser is None:
            logger.warning("%s:%d: unknown setting '%s'", config_path, line_number, key)
            continue
        try:
            settings[key] = parser(value)
        except ValueError:
            logger.warning("%s:%d: invalid value '%s' for '%s'", config_path, line_number, value, key)
    return settings


def merge_settings(*layers: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merges settings dictionaries; later layers win and ``None`` values are ignored."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        merged.update({key: value for key, value in layer.items() if value is not None})
    return merged
