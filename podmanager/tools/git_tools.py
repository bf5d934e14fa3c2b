"""
Git Tools
Thin wrappers around the git binary for the submodule and staging
operations pods are built on. Every wrapper reports success as a bool.

The git binary and the default timeout come from the settings passed in,
or from the process-wide settings when none are given.
"""
import os
import subprocess
import logging
from typing import Dict, Any, List, Optional

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


def is_git_repo(repo_path: str) -> bool:
    """Check if the path is the root of a git repository (or a submodule checkout)."""
    # Submodule checkouts carry a .git file rather than a directory
    return os.path.exists(os.path.join(repo_path, ".git"))


def run_git_command(
    repo_path: str,
    args: List[str],
    timeout: Optional[int] = None,
    require_repo: bool = True,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    """
    Run a git command with repo_path as its working directory.

    Args:
        repo_path: Directory to run git in
        args: Git command arguments (e.g., ["submodule", "add", "--", url, name])
        timeout: Command timeout in seconds, defaults to settings.git_timeout
        require_repo: Refuse to run unless repo_path is a git repository
        settings: Source of the git binary and default timeout

    Returns:
        Dict with success, stdout, stderr, exit_code
    """
    result = {
        "success": False,
        "stdout": "",
        "stderr": "",
        "exit_code": -1,
    }

    if require_repo and not is_git_repo(repo_path):
        result["stderr"] = "Not a git repository"
        return result

    settings = settings or get_settings()
    if timeout is None:
        timeout = settings.git_timeout

    command = [settings.git_binary] + args
    logger.debug(f"Running {' '.join(command)} in {repo_path}")

    try:
        proc = subprocess.run(
            command,
            cwd=repo_path,
            capture_output=True,
            timeout=timeout,
        )

        result["stdout"] = proc.stdout.decode("utf-8", errors="replace")
        result["stderr"] = proc.stderr.decode("utf-8", errors="replace")
        result["exit_code"] = proc.returncode
        result["success"] = proc.returncode == 0

    except subprocess.TimeoutExpired:
        result["stderr"] = f"Git command timed out after {timeout} seconds"
    except OSError as e:
        result["stderr"] = f"Git command failed: {str(e)}"

    if not result["success"]:
        logger.warning(f"git {' '.join(args)} failed in {repo_path}: {result['stderr'].strip()}")

    return result


def git_init(path: str, settings: Optional[Settings] = None) -> bool:
    """Create (if needed) and initialize a repository at path."""
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create directory {path}: {e}")
        return False
    return run_git_command(path, ["init"], require_repo=False, settings=settings)["success"]


# "--" keeps urls and paths that start with "-" from being read as options

def submodule_add(repo_path: str, url: str, path: str, settings: Optional[Settings] = None) -> bool:
    """Add url as a submodule checked out at path."""
    return run_git_command(repo_path, ["submodule", "add", "--", url, path], settings=settings)["success"]


def submodule_deinit(repo_path: str, path: str, settings: Optional[Settings] = None) -> bool:
    """Unregister the submodule at path, discarding local changes."""
    return run_git_command(repo_path, ["submodule", "deinit", "-f", "--", path], settings=settings)["success"]


def remove_path(repo_path: str, path: str, settings: Optional[Settings] = None) -> bool:
    """Remove path from the index and the working tree."""
    return run_git_command(repo_path, ["rm", "-rf", "--", path], settings=settings)["success"]


def stage_file(repo_path: str, filename: str, settings: Optional[Settings] = None) -> bool:
    """Put a file under version control."""
    return run_git_command(repo_path, ["add", "--", filename], settings=settings)["success"]


def stash(checkout_path: str, settings: Optional[Settings] = None) -> bool:
    """Stash local modifications of a checkout."""
    return run_git_command(checkout_path, ["stash"], settings=settings)["success"]


def checkout(checkout_path: str, branch: str, settings: Optional[Settings] = None) -> bool:
    """Switch a checkout to branch."""
    return run_git_command(checkout_path, ["checkout", branch], settings=settings)["success"]


def pull(checkout_path: str, settings: Optional[Settings] = None) -> bool:
    """Fetch and merge upstream changes into a checkout."""
    return run_git_command(checkout_path, ["pull"], settings=settings)["success"]
