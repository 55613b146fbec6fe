"""Defaults taken from the GitHub Actions runner environment."""

from __future__ import annotations

import json
import logging
import os

logger = logging.getLogger(__name__)


def resolve_repository() -> str | None:
    return os.environ.get("GITHUB_REPOSITORY") or None


def resolve_pr_number() -> int | None:
    """Return the pull request number of the triggering event, if any.

    Reads the webhook payload GitHub Actions writes to $GITHUB_EVENT_PATH.
    Events without a pull request (push, schedule) yield None.
    """
    event_path = os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        return None
    try:
        with open(event_path, encoding="utf-8") as f:
            event = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Could not read event payload %s: %s", event_path, e)
        return None

    pull_request = event.get("pull_request") if isinstance(event, dict) else None
    number = (pull_request or {}).get("number")
    return number if isinstance(number, int) else None
