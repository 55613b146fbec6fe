"""Token lookup for the GitHub comment store.

Sources, first hit wins:
  1. a token already present in the loaded config
  2. GITHUB_TOKEN, then GH_TOKEN (the Actions runner and gh both export these)
  3. `gh auth token` for a local run after `gh auth login`
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def _token_from_gh_cli() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("gh CLI unavailable: %s", e)
        return None
    if result.returncode != 0:
        logger.debug("gh auth token exited with %d", result.returncode)
        return None
    return result.stdout.strip() or None


def resolve_github_token(configured: str | None = None) -> str | None:
    """Return a token for the comment store, or None when nothing is available.

    The comment command turns None into a UsageError.
    """
    if configured:
        return configured
    for name in _TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            logger.debug("Using GitHub token from %s.", name)
            return token
    token = _token_from_gh_cli()
    if token:
        logger.debug("Using GitHub token from the gh CLI session.")
    return token
