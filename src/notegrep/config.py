"""Configuration constants and per-space settings for notegrep."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

VERSION = "2.3.0"

# Page names of the report, never searched themselves.
RESULT_PAGE_SAVED = "GREP RESULT"
RESULT_PAGE_VIRTUAL = "GREP RESULT 🔍"

# Only documents with this extension are searched.
DOCUMENT_EXTENSION = ".md"

# Seconds before a running search is aborted.
DEFAULT_TIMEOUT: float = 60.0

DEFAULT_SURROUND: tuple[str, str] = (">>>", "<<<")

# Where the last query is stored between invocations.
DEFAULT_DATA_DIR = Path("~/.local/share/notegrep").expanduser()

# Global config location, used when the space has none.
USER_CONFIG_FILE = Path("~/.config/notegrep/config.json").expanduser()

SPACE_CONFIG_NAME = ".notegrep.json"


def config_candidates(space: Path) -> list[Path]:
    """Config files to look at, in order. First file found is used."""
    return [space / SPACE_CONFIG_NAME, USER_CONFIG_FILE]


@dataclass(frozen=True)
class GrepConfig:
    """Search settings, read-only for the duration of a search."""

    smart_case: bool = True
    # None when highlighting is disabled
    surround: tuple[str, str] | None = DEFAULT_SURROUND
    save_results: bool = False
    ignore_folders: tuple[str, ...] = ()

    @property
    def surround_left(self) -> str:
        return self.surround[0] if self.surround else ""

    @property
    def surround_right(self) -> str:
        return self.surround[1] if self.surround else ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "GrepConfig":
        """Build a config from the camelCase JSON form.

        Unknown keys are ignored, missing keys keep their defaults.
        """
        smart_case = raw.get("smartCase", True)
        if not isinstance(smart_case, bool):
            msg = f"smartCase must be a boolean, got {smart_case!r}"
            raise ValueError(msg)

        save_results = raw.get("saveResults", False)
        if not isinstance(save_results, bool):
            msg = f"saveResults must be a boolean, got {save_results!r}"
            raise ValueError(msg)

        surround: tuple[str, str] | None = DEFAULT_SURROUND
        raw_surround = raw.get("surround")
        if raw_surround is False:
            surround = None
        elif isinstance(raw_surround, dict):
            left = raw_surround.get("left") or DEFAULT_SURROUND[0]
            right = raw_surround.get("right") or DEFAULT_SURROUND[1]
            surround = (str(left), str(right))
        elif raw_surround is not None:
            msg = f"surround must be an object or false, got {raw_surround!r}"
            raise ValueError(msg)

        ignore_folders = raw.get("ignoreFolders") or []
        if not isinstance(ignore_folders, list) or not all(
            isinstance(x, str) for x in ignore_folders
        ):
            msg = f"ignoreFolders must be a list of strings, got {ignore_folders!r}"
            raise ValueError(msg)

        return cls(
            smart_case=smart_case,
            surround=surround,
            save_results=save_results,
            ignore_folders=tuple(ignore_folders),
        )


def load_config(space: Path) -> GrepConfig:
    """Load settings for a space, falling back to defaults.

    Returns:
        GrepConfig from the first config file found, or the defaults.
        Raises ValueError if the file holds anything but a JSON object.
    """
    for candidate in config_candidates(space):
        try:
            contents = candidate.read_text(encoding="utf-8")
        except FileNotFoundError:
            continue
        raw = json.loads(contents)
        if not isinstance(raw, dict):
            msg = f"Config {str(candidate)!r} must contain a JSON object"
            raise ValueError(msg)
        return GrepConfig.from_dict(raw)
    return GrepConfig()
