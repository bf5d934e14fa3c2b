"""
pods command-line tool.

Usage:
    pods init
    pods install qt-json https://github.com/example/qt-json.git --author "Jane Doe"
    pods install-from-index qt-json qt-logger --source https://example.com/pods.json
    pods remove qt-json
    pods update            # every installed pod
    pods update qt-json
    pods list
    pods available --source https://example.com/pods.json
    pods check qt-json
    pods generate
"""
import argparse
import os
import sys
from typing import List, Optional

from .config import get_settings
from .logger import setup_logging
from .manager import PodManager
from .models import Pod

# Commands that only make sense inside an existing repository
REPOSITORY_COMMANDS = {"install", "install-from-index", "remove", "update", "list", "generate"}


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="pods",
        description="Manage source dependencies (pods) as git submodules"
    )
    parser.add_argument("--repo", default=os.getcwd(), help="Repository to operate on (default: current directory)")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (default: %(default)s)")
    parser.add_argument("--json-logs", action="store_true", default=settings.json_logs, help="Emit logs as JSON")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Initialize the repository and generate build files")

    install = subparsers.add_parser("install", help="Install a pod from a clone URL")
    install.add_argument("name", help="Pod name (also its directory)")
    install.add_argument("url", help="Clone URL")
    install.add_argument("--author", default="")
    install.add_argument("--description", default="")
    install.add_argument("--license", default="")
    install.add_argument("--website", default="")

    install_index = subparsers.add_parser("install-from-index", help="Install pods listed by the pod index")
    install_index.add_argument("names", nargs="+", help="Pod names")
    install_index.add_argument("--source", action="append", dest="sources", help="Index URL (repeatable)")

    remove = subparsers.add_parser("remove", help="Remove installed pods")
    remove.add_argument("names", nargs="+", help="Pod names")

    update = subparsers.add_parser("update", help="Update pods (all of them when no names are given)")
    update.add_argument("names", nargs="*", help="Pod names")

    subparsers.add_parser("list", help="List installed pods")

    available = subparsers.add_parser("available", help="List pods offered by the pod index")
    available.add_argument("--source", action="append", dest="sources", help="Index URL (repeatable)")

    check = subparsers.add_parser("check", help="Check that a directory follows the pod layout")
    check.add_argument("name", help="Pod name")

    subparsers.add_parser("generate", help="Regenerate pods.pri, pods-subdirs.pri and the umbrella project")

    return parser


def print_pods(pods: List[Pod]) -> None:
    if not pods:
        print("No pods found.")
        return
    for pod in pods:
        print(f"{pod.name}  {pod.url}")
        if pod.description:
            print(f"    {pod.description}")
        details = ", ".join(
            f"{label}: {value}"
            for label, value in (("author", pod.author), ("license", pod.license), ("website", pod.website))
            if value
        )
        if details:
            print(f"    {details}")


def report(success: bool, message: str) -> int:
    if success:
        print(f"✅ {message}")
        return 0
    print(f"❌ {message} failed", file=sys.stderr)
    return 1


def install_from_index(manager: PodManager, repository: str, names: List[str], sources: Optional[List[str]]) -> int:
    available = {pod.name: pod for pod in manager.list_available_pods(sources)}
    missing = [name for name in names if name not in available]
    if missing:
        print(f"❌ Not found in pod index: {', '.join(missing)}", file=sys.stderr)
        return 1
    pods = [available[name] for name in names]
    return report(manager.install_pods(repository, pods), f"Install of {', '.join(names)}")


def run(args: argparse.Namespace, manager: PodManager) -> int:
    repository = os.path.abspath(args.repo)

    if args.command == "init":
        return report(manager.create_project(repository), f"Project setup in {repository}")

    if args.command == "install":
        pod = Pod(
            name=args.name,
            url=args.url,
            author=args.author,
            description=args.description,
            license=args.license,
            website=args.website,
        )
        return report(manager.install_pod(repository, pod), f"Install of {pod.name}")

    if args.command == "install-from-index":
        return install_from_index(manager, repository, args.names, args.sources)

    if args.command == "remove":
        return report(manager.remove_pods(repository, args.names), f"Removal of {', '.join(args.names)}")

    if args.command == "update":
        if args.names:
            return report(manager.update_pods(repository, args.names), f"Update of {', '.join(args.names)}")
        return report(manager.update_all_pods(repository), "Update of all pods")

    if args.command == "list":
        print_pods(manager.list_installed_pods(repository))
        return 0

    if args.command == "available":
        print_pods(manager.list_available_pods(args.sources))
        return 0

    if args.command == "check":
        return report(manager.check_pod(repository, args.name), f"Pod layout check of {args.name}")

    if args.command == "generate":
        return report(manager.generate_qmake_files(repository), "Build file generation")

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(log_level=args.log_level, json_logs=args.json_logs, colored=sys.stdout.isatty())

    manager = PodManager()
    if args.command in REPOSITORY_COMMANDS and not manager.is_git_repository(args.repo):
        print(f"❌ {os.path.abspath(args.repo)} is not a git repository (run 'pods init' first)", file=sys.stderr)
        return 1

    return run(args, manager)


if __name__ == "__main__":
    sys.exit(main())
