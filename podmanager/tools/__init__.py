"""
Tools Module
Git integration used by the pod manager.
"""

from .git_tools import (
    is_git_repo,
    run_git_command,
    git_init,
    submodule_add,
    submodule_deinit,
    remove_path,
    stage_file,
    stash,
    checkout,
    pull,
)

__all__ = [
    "is_git_repo",
    "run_git_command",
    "git_init",
    "submodule_add",
    "submodule_deinit",
    "remove_path",
    "stage_file",
    "stash",
    "checkout",
    "pull",
]
