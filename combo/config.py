"""Read-only JSON defaults.

Loads the optional ``config.json`` from the user config directory. The file
is never written; malformed or missing config falls back to built-in
defaults. Command-line flags always win over values found here.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "combo"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class UserDefaults:
    """Display defaults resolved from config file and environment."""

    theme: str | None = None
    no_color: bool = False


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_user_defaults(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> UserDefaults:
    """Resolve display defaults; only well-typed values are accepted.

    A non-empty ``NO_COLOR`` environment variable forces colourless output.
    """
    environ = os.environ if environ is None else environ
    data = load_config(path)

    theme = data.get("theme")
    if not isinstance(theme, str) or not theme.strip():
        theme = None
    else:
        theme = theme.strip()

    no_color = data.get("no_color")
    no_color = no_color if isinstance(no_color, bool) else False
    if environ.get("NO_COLOR"):
        no_color = True
    return UserDefaults(theme=theme, no_color=no_color)
