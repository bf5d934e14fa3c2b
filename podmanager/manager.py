"""
Pod Manager
Installs, removes and updates pods in a git repository and keeps the
.podinfo metadata and generated qmake files in step with the submodules.

Each operation is a fixed sequence of steps. The first failing step ends
the sequence and the operation reports False; steps that already ran are
left in place.
"""
import os
import shutil
import logging
from typing import List, Optional

from .config import Settings, get_settings
from .index import list_available_pods
from .logger import log_with_extra
from .models import Pod
from . import podinfo, qmake
from .tools import git_tools

logger = logging.getLogger(__name__)

REQUIRED_POD_FILES = ("LICENSE", "README.md")


class PodManager:
    """Manages the pods of local git repositories."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _finished(self, operation: str, success: bool, **details) -> bool:
        level = "info" if success else "warning"
        outcome = "succeeded" if success else "failed"
        log_with_extra(logger, level, f"{operation} {outcome}", operation=operation, success=success, **details)
        return success

    def is_git_repository(self, repository: str) -> bool:
        return git_tools.is_git_repo(repository)

    # -- install -----------------------------------------------------------

    def _add_pod_submodule(self, repository: str, pod: Pod) -> bool:
        if not pod.name:
            raise ValueError("Pod name must not be empty")
        logger.info(f"Adding pod {pod.name} from {pod.url}")
        return (
            git_tools.submodule_add(repository, pod.url, pod.name, settings=self.settings)
            and podinfo.write_pod_info(repository, pod, settings=self.settings)
        )

    def install_pod(self, repository: str, pod: Pod) -> bool:
        """Add a single pod as a submodule and record its metadata."""
        success = (
            self.is_git_repository(repository)
            and self._add_pod_submodule(repository, pod)
            and self.generate_qmake_files(repository)
        )
        return self._finished("install_pod", success, repository=repository, pod=pod.name)

    def install_pods(self, repository: str, pods: List[Pod]) -> bool:
        """Add several pods, stopping at the first one that fails."""
        success = (
            self.is_git_repository(repository)
            and all(self._add_pod_submodule(repository, pod) for pod in pods)
            and self.generate_qmake_files(repository)
        )
        return self._finished("install_pods", success, repository=repository, pods=[pod.name for pod in pods])

    # -- remove ------------------------------------------------------------

    def _remove_module_store(self, repository: str, pod_name: str) -> bool:
        """Delete the submodule's git directory kept under .git/modules."""
        module_store = os.path.join(repository, ".git", "modules", pod_name)
        if not os.path.exists(module_store):
            return True
        try:
            shutil.rmtree(module_store)
        except OSError as e:
            logger.error(f"Failed to delete {module_store}: {e}")
            return False
        return True

    def _remove_pod_submodule(self, repository: str, pod_name: str) -> bool:
        if not pod_name:
            raise ValueError("Pod name must not be empty")
        logger.info(f"Removing pod {pod_name}")
        return (
            git_tools.submodule_deinit(repository, pod_name, settings=self.settings)
            and git_tools.remove_path(repository, pod_name, settings=self.settings)
            and self._remove_module_store(repository, pod_name)
            and podinfo.purge_pod_info(repository, pod_name, settings=self.settings)
        )

    def remove_pod(self, repository: str, pod_name: str) -> bool:
        success = (
            self.is_git_repository(repository)
            and self._remove_pod_submodule(repository, pod_name)
            and self.generate_qmake_files(repository)
        )
        return self._finished("remove_pod", success, repository=repository, pod=pod_name)

    def remove_pods(self, repository: str, pod_names: List[str]) -> bool:
        success = (
            self.is_git_repository(repository)
            and all(self._remove_pod_submodule(repository, name) for name in pod_names)
            and self.generate_qmake_files(repository)
        )
        return self._finished("remove_pods", success, repository=repository, pods=list(pod_names))

    # -- update ------------------------------------------------------------

    def _update_pod_submodule(self, repository: str, pod_name: str) -> bool:
        """Stash local changes, switch to the update branch and pull."""
        checkout_path = os.path.join(os.path.abspath(repository), pod_name)
        logger.info(f"Updating pod {pod_name} to latest {self.settings.update_branch}")
        return (
            git_tools.stash(checkout_path, settings=self.settings)
            and git_tools.checkout(checkout_path, self.settings.update_branch, settings=self.settings)
            and git_tools.pull(checkout_path, settings=self.settings)
        )

    def update_pod(self, repository: str, pod_name: str) -> bool:
        success = (
            self.is_git_repository(repository)
            and self._update_pod_submodule(repository, pod_name)
        )
        return self._finished("update_pod", success, repository=repository, pod=pod_name)

    def update_pods(self, repository: str, pod_names: List[str]) -> bool:
        success = (
            self.is_git_repository(repository)
            and all(self._update_pod_submodule(repository, name) for name in pod_names)
        )
        return self._finished("update_pods", success, repository=repository, pods=list(pod_names))

    def update_all_pods(self, repository: str) -> bool:
        """Update every installed pod, then regenerate the build files."""
        success = (
            self.is_git_repository(repository)
            and all(
                self._update_pod_submodule(repository, pod.name)
                for pod in self.list_installed_pods(repository)
            )
            and self.generate_qmake_files(repository)
        )
        return self._finished("update_all_pods", success, repository=repository)

    # -- queries -----------------------------------------------------------

    def list_installed_pods(self, repository: str) -> List[Pod]:
        """Pods registered in .gitmodules, enriched with .podinfo metadata."""
        pods = [
            podinfo.read_pod_info(repository, Pod(name=path, url=url))
            for path, url in podinfo.read_submodules(repository)
        ]
        logger.debug(f"Found {len(pods)} installed pods in {repository}")
        return pods

    def list_available_pods(self, sources: Optional[List[str]] = None) -> List[Pod]:
        """Pods offered by the given index URLs (the configured ones by default)."""
        if sources is None:
            sources = self.settings.sources
        return list_available_pods(sources, timeout=self.settings.http_timeout)

    def check_pod(self, repository: str, pod_name: str) -> bool:
        """
        Check that a directory follows the pod layout: a lowercase name and
        LICENSE, README.md, <name>.pri and <name>.pro inside it.
        """
        pod_dir = os.path.join(repository, pod_name)
        required = REQUIRED_POD_FILES + (f"{pod_name}.pri", f"{pod_name}.pro")
        valid = (
            bool(pod_name)
            and pod_name == pod_name.lower()
            and os.path.isdir(pod_dir)
            and all(os.path.isfile(os.path.join(pod_dir, filename)) for filename in required)
        )
        return self._finished("check_pod", valid, repository=repository, pod=pod_name)

    # -- project -----------------------------------------------------------

    def create_project(self, repository: str) -> bool:
        """Initialize a repository if needed and generate its build files."""
        if not self.is_git_repository(repository):
            logger.info(f"Initializing git repository at {repository}")
            if not git_tools.git_init(repository, settings=self.settings):
                return self._finished("create_project", False, repository=repository)

        success = (
            self.is_git_repository(repository)
            and self.generate_qmake_files(repository)
        )
        return self._finished("create_project", success, repository=repository)

    def generate_qmake_files(self, repository: str) -> bool:
        pods = self.list_installed_pods(repository)
        return qmake.generate_qmake_files(repository, pods, settings=self.settings)


# Global instance
pod_manager = PodManager()
