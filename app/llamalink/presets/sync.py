"""LM Studio config preset syncing.

LM Studio keeps a ``config.map.json`` in its config-presets directory
that maps model name patterns to preset files. After linking, models
from known families are mapped to a matching preset, and missing preset
files are created from a default template.
"""

import json
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

logger = logging.getLogger(__name__)

CONFIG_MAP_FILE = "config.map.json"
PRESET_MAP_KEY = "preset_map"

# Substring of a model name -> preset file used for that family
DEFAULT_PRESET_RULES: dict[str, str] = {
    "codellama": "codellama_instruct.preset.json",
}

DEFAULT_PRESET: dict[str, Any] = {
    "name": "Default Preset",
    "inference_params": {
        "input_prefix": "### Instruction:\n",
        "input_suffix": "\n### Response:\n",
        "antiprompt": ["### Instruction:"],
        "pre_prompt": (
            "Below is an instruction that describes a task. "
            "Write a response that appropriately completes the request."
        ),
        "pre_prompt_suffix": "\n",
        "pre_prompt_prefix": "",
    },
}


class PresetError(Exception):
    """Raised when the preset map cannot be read or written."""


@dataclass(frozen=True, slots=True)
class PresetAssignment:
    """A model mapped to a preset file.

    Attributes:
        model: Model identifier used as the map key.
        preset_file: Preset file name inside the presets directory.
        created: Whether the preset file was written by this sync.
    """

    model: str
    preset_file: str
    created: bool = False


class PresetSync:
    """Maintains LM Studio's preset map for linked models.

    Args:
        presets_dir: LM Studio config-presets directory.
        overwrite: Rewrite preset files that already exist.
        rules: Model-family rules; defaults to DEFAULT_PRESET_RULES.
    """

    def __init__(
        self,
        presets_dir: Path,
        *,
        overwrite: bool = False,
        rules: dict[str, str] | None = None,
    ) -> None:
        self._presets_dir = presets_dir
        self._overwrite = overwrite
        self._rules = DEFAULT_PRESET_RULES if rules is None else rules

    @property
    def map_path(self) -> Path:
        """Path of config.map.json."""
        return self._presets_dir / CONFIG_MAP_FILE

    def load_map(self) -> dict[str, Any]:
        """Read the preset map, returning an empty map if none exists.

        Raises:
            PresetError: If the file cannot be read or is not a JSON object.
        """
        try:
            raw = self.map_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise PresetError(f"Failed to read config map file: {e}") from e

        try:
            data: object = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PresetError(f"Failed to parse config map JSON: {e}") from e

        if not isinstance(data, dict):
            raise PresetError(f"Config map is not a JSON object: {self.map_path}")
        return cast(dict[str, Any], data)

    def preset_for(self, model_name: str) -> str | None:
        """Return the preset file a model's family maps to, if any."""
        for needle, preset_file in self._rules.items():
            if needle in model_name:
                return preset_file
        return None

    def sync(self, model_names: Iterable[str]) -> list[PresetAssignment]:
        """Map every model from a known family to its preset.

        Other entries in the map are preserved. A preset file that cannot
        be created is logged and its models are left unmapped.

        Args:
            model_names: Models to consider.

        Returns:
            Assignments written to the map.

        Raises:
            PresetError: If the map cannot be read or written.
        """
        config_map = self.load_map()
        preset_map = config_map.get(PRESET_MAP_KEY)
        if not isinstance(preset_map, dict):
            preset_map = {}

        assignments: list[PresetAssignment] = []
        ensured: dict[str, bool] = {}

        for name in model_names:
            preset_file = self.preset_for(name)
            if preset_file is None:
                continue

            if preset_file not in ensured:
                try:
                    ensured[preset_file] = self._ensure_preset_file(preset_file)
                except OSError as e:
                    logger.warning("Failed to create config preset file %s: %s", preset_file, e)
                    continue

            preset_map[name] = preset_file
            assignments.append(
                PresetAssignment(model=name, preset_file=preset_file, created=ensured[preset_file])
            )
            # Only the first model reports the file as freshly created
            ensured[preset_file] = False

        config_map[PRESET_MAP_KEY] = preset_map
        try:
            self._presets_dir.mkdir(parents=True, exist_ok=True)
            self.map_path.write_text(json.dumps(config_map, indent=2), encoding="utf-8")
        except OSError as e:
            raise PresetError(f"Failed to write config map file: {e}") from e

        logger.info("Config presets synced: %d assignment(s)", len(assignments))
        return assignments

    def show(self, model_name: str) -> dict[str, Any] | None:
        """Find the preset whose map pattern matches a model name.

        Map keys are treated as regular expressions searched in the name;
        keys that are not valid expressions are skipped.

        Args:
            model_name: Model identifier.

        Returns:
            Parsed preset JSON, or None if no pattern matches.

        Raises:
            PresetError: If the map or the preset file cannot be read.
        """
        preset_map = self.load_map().get(PRESET_MAP_KEY) or {}
        if not isinstance(preset_map, dict):
            return None

        preset_file: str | None = None
        for pattern, candidate in preset_map.items():
            try:
                matched = re.search(pattern, model_name) is not None
            except re.error:
                logger.debug("Skipping invalid preset pattern %r", pattern)
                continue
            if matched and isinstance(candidate, str):
                preset_file = candidate
                break

        if preset_file is None:
            return None

        path = self._presets_dir / preset_file
        try:
            return cast(dict[str, Any], json.loads(path.read_text(encoding="utf-8")))
        except (OSError, json.JSONDecodeError) as e:
            raise PresetError(f"Failed to read preset {path}: {e}") from e

    def _ensure_preset_file(self, preset_file: str) -> bool:
        """Write the default preset unless it exists (and overwrite is off).

        Returns:
            True if the file was written.
        """
        path = self._presets_dir / preset_file
        if path.exists() and not self._overwrite:
            return False
        self._presets_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(DEFAULT_PRESET, indent=2), encoding="utf-8")
        logger.info("Wrote config preset %s", path)
        return True
