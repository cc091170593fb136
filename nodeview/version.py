import logging
import os
import subprocess
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version
from typing import Optional

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "k8s-nodeview"

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
# Flat layout: a source checkout keeps the package directly under the repo root.
SOURCE_ROOT = os.path.dirname(PACKAGE_DIR)


def get_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        logger.debug("%s package metadata not found, returning 'dev'.", DISTRIBUTION_NAME)
        return "dev"


def get_source_revision() -> Optional[str]:
    """
    Return the short commit of the checkout nodeview itself runs from.

    git is asked from the package directory, never from the caller's cwd, and
    the answer only counts when that checkout's root is the one holding the
    package. An install in site-packages that happens to sit inside some other
    repository (a virtualenv in a project, say) reports no revision.
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel", "--short", "HEAD"],
            cwd=PACKAGE_DIR,
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    lines = result.stdout.strip().splitlines()
    if len(lines) != 2:
        return None
    toplevel, revision = lines
    if os.path.realpath(toplevel) != os.path.realpath(SOURCE_ROOT):
        logger.debug("Ignoring revision of unrelated checkout %s.", toplevel)
        return None
    return revision


def get_version_string() -> str:
    """Format the `-version` line, e.g. "k8s-nodeview, version 0.1.0 (commit: abc1234)"."""
    ver = get_version()
    revision = get_source_revision()
    if revision:
        return f"{DISTRIBUTION_NAME}, version {ver} (commit: {revision})"
    return f"{DISTRIBUTION_NAME}, version {ver}"
