"""
Pod metadata bookkeeping.
Reads and writes the per-repository .podinfo file and reads the
submodule manifest (.gitmodules) to enumerate installed pods.
"""
import os
import configparser
import logging
from typing import List, Optional, Tuple

from .config import Settings
from .models import Pod
from .tools import git_tools

logger = logging.getLogger(__name__)

PODINFO_FILE = ".podinfo"
GITMODULES_FILE = ".gitmodules"
POD_INFO_KEYS = ("author", "description", "license", "website")

# Section headers are never empty, so no pod name can land in the defaults
NO_DEFAULT_SECTION = ""


def _new_parser() -> configparser.ConfigParser:
    return configparser.ConfigParser(
        interpolation=None,
        strict=False,
        default_section=NO_DEFAULT_SECTION,
    )


def _read_ini(path: str) -> configparser.ConfigParser:
    """Load an INI file; a missing file gives an empty parser, a malformed one raises configparser.Error."""
    parser = _new_parser()
    if os.path.exists(path):
        parser.read(path, encoding="utf-8")
    return parser


def _load_ini(path: str) -> configparser.ConfigParser:
    """Load an INI file for reading only, treating a malformed file as empty."""
    try:
        return _read_ini(path)
    except configparser.Error as e:
        logger.warning(f"Ignoring malformed {os.path.basename(path)} at {path}: {e}")
        return _new_parser()


def read_submodules(repository: str) -> List[Tuple[str, str]]:
    """Return (path, url) for every submodule listed in .gitmodules, sorted by section name."""
    gitmodules = _load_ini(os.path.join(repository, GITMODULES_FILE))
    submodules = []
    for section in sorted(gitmodules.sections()):
        if not section.startswith("submodule"):
            continue
        submodules.append((
            gitmodules.get(section, "path", fallback=""),
            gitmodules.get(section, "url", fallback=""),
        ))
    return submodules


def read_pod_info(repository: str, pod: Pod) -> Pod:
    """
    Fill in a pod's author, description, license and website from .podinfo.

    The pod is returned unchanged when the file has no section for it.
    """
    podinfo = _load_ini(os.path.join(repository, PODINFO_FILE))
    if not podinfo.has_section(pod.name):
        return pod

    return pod.model_copy(update={
        key: podinfo.get(pod.name, key, fallback="") for key in POD_INFO_KEYS
    })


def _load_for_update(repository: str) -> Optional[configparser.ConfigParser]:
    # Rewriting an unparsable file would drop every other pod's metadata
    path = os.path.join(repository, PODINFO_FILE)
    try:
        return _read_ini(path)
    except configparser.Error as e:
        logger.error(f"Refusing to rewrite malformed {path}: {e}")
        return None


def _save_podinfo(repository: str, podinfo: configparser.ConfigParser, settings: Optional[Settings]) -> bool:
    path = os.path.join(repository, PODINFO_FILE)
    try:
        with open(path, "w", encoding="utf-8") as f:
            podinfo.write(f)
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        return False
    return git_tools.stage_file(repository, PODINFO_FILE, settings=settings)


def write_pod_info(repository: str, pod: Pod, settings: Optional[Settings] = None) -> bool:
    """Store a pod's metadata in .podinfo and stage the file."""
    if not pod.name:
        raise ValueError("Pod name must not be empty")
    podinfo = _load_for_update(repository)
    if podinfo is None:
        return False
    podinfo[pod.name] = {key: getattr(pod, key) for key in POD_INFO_KEYS}
    return _save_podinfo(repository, podinfo, settings)


def purge_pod_info(repository: str, pod_name: str, settings: Optional[Settings] = None) -> bool:
    """Drop a pod's metadata from .podinfo and stage the file."""
    podinfo = _load_for_update(repository)
    if podinfo is None:
        return False
    podinfo.remove_section(pod_name)
    return _save_podinfo(repository, podinfo, settings)
