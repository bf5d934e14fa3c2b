"""
pods - manage source dependencies as git submodules.
"""
from .models import Pod
from .manager import PodManager, pod_manager

__version__ = "0.1.0"

__all__ = [
    "Pod",
    "PodManager",
    "pod_manager",
]
