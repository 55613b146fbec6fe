import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "analyze_log": [],  # text or JSON reports from `flutter analyze` / `dart analyze`
    "custom_lint_log": [],  # reports from `dart run custom_lint`
    "working_dir": None,  # None = $GITHUB_WORKSPACE; prefix stripped from analyzer paths
    "max_issues": 100,
    "per_page": 100,
    "verbose": False,
}

_LIST_KEYS = ("analyze_log", "custom_lint_log")


def _as_list(value) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [v for v in value if v]
    return [value] if value else []


def load_config(config_path: str = ".lintnote.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .lintnote.yml in the current directory
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, **{key: list(DEFAULT_CONFIG[key]) for key in _LIST_KEYS}}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    for key in _LIST_KEYS:
        config[key] = _as_list(config.get(key))

    if not config.get("working_dir"):
        config["working_dir"] = os.environ.get("GITHUB_WORKSPACE", "")

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


def validate_config(config: dict) -> None:
    """Check the values the pipeline depends on."""
    max_issues = config.get("max_issues")
    if not isinstance(max_issues, int) or isinstance(max_issues, bool) or max_issues < 1:
        raise ValueError(f"max_issues must be a positive integer, got {max_issues!r}.")
