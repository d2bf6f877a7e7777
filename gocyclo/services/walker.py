import logging
import os
from typing import Iterable, List

from gocyclo.config import CURRENT_DIR, GODEPS_DIR, SOURCE_SUFFIX, VENDOR_DIR
from gocyclo.errors import TraversalError
from gocyclo.models import ExclusionFlags

logger = logging.getLogger(__name__)


def reserved_prefix(root: str, reserved: str) -> str:
    """
    Path prefix under which files belong to the reserved directory.

    Walking the current directory yields paths like "vendor/x.go", so the
    prefix for "." is the bare directory name.
    """
    if root == CURRENT_DIR:
        return reserved
    return os.path.normpath(os.path.join(root, reserved))


def is_excluded(root: str, path: str, flags: ExclusionFlags) -> bool:
    """
    Return True if `path`, found while walking `root`, lives under a reserved
    dependency directory whose skip flag is set.

    This is a plain string-prefix test: with skip_vendor set, a sibling
    named "vendorized" is excluded too.
    """
    if flags.skip_godeps and path.startswith(reserved_prefix(root, GODEPS_DIR)):
        return True
    if flags.skip_vendor and path.startswith(reserved_prefix(root, VENDOR_DIR)):
        return True
    return False


def is_analyze_target(root: str, path: str, flags: ExclusionFlags) -> bool:
    return path.endswith(SOURCE_SUFFIX) and not is_excluded(root, path, flags)


def _raise_walk_error(error: OSError) -> None:
    path = error.filename or "<unknown>"
    logger.error(f"Failed to walk {path}: {error}")
    raise TraversalError(str(path), error.strerror or str(error)) from error


def walk_dir(root: str, flags: ExclusionFlags) -> List[str]:
    """
    Recursively collect the Go files under `root`, visiting the entries of
    each directory in sorted order.

    The first file-system error aborts the walk with TraversalError.
    """
    files: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        # Sort in place so os.walk descends in lexical order
        dirnames.sort()
        for name in sorted(filenames):
            path = os.path.normpath(os.path.join(dirpath, name))
            if is_analyze_target(root, path, flags):
                files.append(path)
    return files


def collect_files(paths: Iterable[str], flags: ExclusionFlags) -> List[str]:
    """
    Expand the given roots into the list of files to analyze.

    A root that is not a directory is taken as-is, whatever its suffix.
    """
    candidates: List[str] = []
    for path in paths:
        if os.path.isdir(path):
            candidates.extend(walk_dir(path, flags))
        else:
            candidates.append(path)
    return candidates
