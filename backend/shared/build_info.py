"""Build metadata and release notes exposed at runtime.

APP_VERSION and GIT_COMMIT can be set via environment variables at build time.
APP_VERSION otherwise comes from the newest changelog entry. GIT_COMMIT is
"dev" when unset; the working directory is never consulted.
"""

import os

from pydantic import BaseModel


class ChangelogEntry(BaseModel, frozen=True):
    """Release notes for one version."""

    version: str
    changes: tuple[str, ...]


# newest first
CHANGELOG: tuple[ChangelogEntry, ...] = (
    ChangelogEntry(version="1.1.2", changes=("Simplified recording of wins with zero faans.",)),
    ChangelogEntry(version="1.1.1", changes=("Display color, size, and label adjustments.",)),
    ChangelogEntry(version="1.1.0", changes=("Faan entry accepts numbers only.",)),
    ChangelogEntry(version="1.0.1", changes=("Added changelog and version display.",)),
    ChangelogEntry(version="1.0.0", changes=("Initial release.",)),
)

APP_VERSION: str = os.environ.get("APP_VERSION") or CHANGELOG[0].version
GIT_COMMIT: str = os.environ.get("GIT_COMMIT") or "dev"
