"""Build metadata, injected at deploy time through the environment."""

import os

__version__ = "1.2.0"

VERSION = os.environ.get("APP_VERSION", __version__)
GIT_COMMIT = os.environ.get("GIT_COMMIT", "none")
BUILD_TIME = os.environ.get("BUILD_TIME", "unknown")


def version_string() -> str:
    """Human-readable version line, e.g. for ``--version``."""
    return f"RDS Tag Setter {VERSION} ({GIT_COMMIT}) built at {BUILD_TIME}"


def build_info() -> dict[str, str]:
    """Version fields attached to every log record."""
    return {
        "version": VERSION,
        "commit": GIT_COMMIT,
        "built_at": BUILD_TIME,
    }
