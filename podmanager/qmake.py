"""
qmake build file generation.

Every repository gets three generated files:
- pods.pri, included by the application project to pull in each pod
- pods-subdirs.pri, extending SUBDIRS of the umbrella project
- <repository name>.pro, the umbrella subdirs project (only created once)
All of them are staged after being written.
"""
import os
import logging
from typing import List, Optional

from .config import Settings
from .models import Pod
from .tools import git_tools

logger = logging.getLogger(__name__)

PODS_PRI = "pods.pri"
PODS_SUBDIRS_PRI = "pods-subdirs.pri"

PODS_PRI_HEADER = (
    "# Auto-generated by qt-pods. Do not edit.\n"
    "# Include this to your application project file with:\n"
    "# include(../pods.pri)\n"
    "# This file should be put under version control.\n"
)

PODS_SUBDIRS_PRI_HEADER = (
    "# Auto-generated by qt-pods. Do not edit.\n"
    "# Include this to your subdirs project file with:\n"
    "# include(pods-subdirs.pri)\n"
    "# This file should be put under version control.\n"
)

SUBDIRS_PRO = (
    "# Auto-generated by qt-pods.\n"
    "# This file should be put under version control.\n"
    "TEMPLATE = subdirs\n"
    "include(pods-subdirs.pri)\n"
    "SUBDIRS +=\n"
)


def render_pods_pri(pods: List[Pod]) -> str:
    includes = "".join(f"include({pod.name}/{pod.name}.pri)\n" for pod in pods)
    return f"{PODS_PRI_HEADER}\n{includes}\n"


def render_pods_subdirs_pri(pods: List[Pod]) -> str:
    subdirs = "SUBDIRS += " + "".join(f"\\\n\t{pod.name} " for pod in pods)
    return f"{PODS_SUBDIRS_PRI_HEADER}\n{subdirs}\n\n"


def umbrella_project_file(repository: str) -> str:
    """The umbrella project is named after the repository directory."""
    name = os.path.basename(os.path.normpath(os.path.abspath(repository)))
    return f"{name}.pro"


def _write_and_stage(repository: str, filename: str, content: str, settings: Optional[Settings]) -> bool:
    path = os.path.join(repository, filename)
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        return False
    return git_tools.stage_file(repository, filename, settings=settings)


def generate_pods_pri(repository: str, pods: List[Pod], settings: Optional[Settings] = None) -> bool:
    return _write_and_stage(repository, PODS_PRI, render_pods_pri(pods), settings)


def generate_pods_subdirs_pri(repository: str, pods: List[Pod], settings: Optional[Settings] = None) -> bool:
    return _write_and_stage(repository, PODS_SUBDIRS_PRI, render_pods_subdirs_pri(pods), settings)


def generate_subdirs_pro(repository: str, settings: Optional[Settings] = None) -> bool:
    """Create the umbrella project if missing; stage it either way."""
    filename = umbrella_project_file(repository)
    if os.path.exists(os.path.join(repository, filename)):
        return git_tools.stage_file(repository, filename, settings=settings)
    logger.info(f"Creating umbrella project {filename}")
    return _write_and_stage(repository, filename, SUBDIRS_PRO, settings)


def generate_qmake_files(repository: str, pods: List[Pod], settings: Optional[Settings] = None) -> bool:
    """Regenerate all build files for the given installed pods."""
    return (
        generate_pods_pri(repository, pods, settings)
        and generate_pods_subdirs_pri(repository, pods, settings)
        and generate_subdirs_pro(repository, settings)
    )
