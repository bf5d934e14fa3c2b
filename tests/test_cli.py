import unittest
import io
import os
import tempfile
from contextlib import redirect_stdout, redirect_stderr
from unittest.mock import patch
from podmanager import cli
from podmanager.models import Pod


class TestCli(unittest.TestCase):

    def setUp(self):
        self.repo = tempfile.gettempdir()
        patcher = patch('podmanager.cli.PodManager')
        self.manager = patcher.start().return_value
        self.addCleanup(patcher.stop)
        logging_patcher = patch('podmanager.cli.setup_logging')
        logging_patcher.start()
        self.addCleanup(logging_patcher.stop)
        self.manager.is_git_repository.return_value = True

    def run_cli(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = cli.main(["--repo", self.repo] + list(argv))
        return code, stdout.getvalue(), stderr.getvalue()

    def test_install(self):
        self.manager.install_pod.return_value = True

        code, out, _ = self.run_cli("install", "qt-json", "https://example.com/qt-json.git", "--author", "Jane Doe")

        self.assertEqual(code, 0)
        self.assertIn("Install of qt-json", out)
        repository, pod = self.manager.install_pod.call_args.args
        self.assertEqual(repository, os.path.abspath(self.repo))
        self.assertEqual(pod, Pod(name="qt-json", url="https://example.com/qt-json.git", author="Jane Doe"))

    def test_install_failure_exit_code(self):
        self.manager.install_pod.return_value = False

        code, _, err = self.run_cli("install", "qt-json", "https://example.com/qt-json.git")

        self.assertEqual(code, 1)
        self.assertIn("failed", err)

    def test_requires_repository(self):
        self.manager.is_git_repository.return_value = False

        code, _, err = self.run_cli("list")

        self.assertEqual(code, 1)
        self.assertIn("not a git repository", err)
        self.manager.list_installed_pods.assert_not_called()

    def test_init_runs_outside_repository(self):
        self.manager.is_git_repository.return_value = False
        self.manager.create_project.return_value = True

        code, _, _ = self.run_cli("init")

        self.assertEqual(code, 0)
        self.manager.create_project.assert_called_once_with(os.path.abspath(self.repo))

    def test_update_without_names_updates_everything(self):
        self.manager.update_all_pods.return_value = True

        code, _, _ = self.run_cli("update")

        self.assertEqual(code, 0)
        self.manager.update_all_pods.assert_called_once()
        self.manager.update_pods.assert_not_called()

    def test_update_named_pods(self):
        self.manager.update_pods.return_value = True

        self.run_cli("update", "qt-json", "qt-logger")

        self.manager.update_pods.assert_called_once_with(os.path.abspath(self.repo), ["qt-json", "qt-logger"])

    def test_remove(self):
        self.manager.remove_pods.return_value = True

        code, _, _ = self.run_cli("remove", "qt-json")

        self.assertEqual(code, 0)
        self.manager.remove_pods.assert_called_once_with(os.path.abspath(self.repo), ["qt-json"])

    def test_list(self):
        self.manager.list_installed_pods.return_value = [
            Pod(name="qt-json", url="https://example.com/qt-json.git", description="JSON helpers", license="MIT"),
        ]

        code, out, _ = self.run_cli("list")

        self.assertEqual(code, 0)
        self.assertIn("qt-json  https://example.com/qt-json.git", out)
        self.assertIn("JSON helpers", out)
        self.assertIn("license: MIT", out)

    def test_list_empty(self):
        self.manager.list_installed_pods.return_value = []

        _, out, _ = self.run_cli("list")

        self.assertIn("No pods found.", out)

    def test_available_with_sources(self):
        self.manager.list_available_pods.return_value = [Pod(name="qt-json", url="u")]

        code, out, _ = self.run_cli("available", "--source", "https://a.example.com", "--source", "https://b.example.com")

        self.assertEqual(code, 0)
        self.manager.list_available_pods.assert_called_once_with(["https://a.example.com", "https://b.example.com"])
        self.assertIn("qt-json", out)

    def test_install_from_index(self):
        self.manager.list_available_pods.return_value = [
            Pod(name="qt-json", url="https://example.com/qt-json.git"),
            Pod(name="qt-logger", url="https://example.com/qt-logger.git"),
        ]
        self.manager.install_pods.return_value = True

        code, _, _ = self.run_cli("install-from-index", "qt-logger")

        self.assertEqual(code, 0)
        _, pods = self.manager.install_pods.call_args.args
        self.assertEqual([pod.name for pod in pods], ["qt-logger"])

    def test_install_from_index_unknown_pod(self):
        self.manager.list_available_pods.return_value = [Pod(name="qt-json", url="u")]

        code, _, err = self.run_cli("install-from-index", "qt-json", "qt-missing")

        self.assertEqual(code, 1)
        self.assertIn("qt-missing", err)
        self.manager.install_pods.assert_not_called()

    def test_check(self):
        self.manager.check_pod.return_value = False

        code, _, _ = self.run_cli("check", "QtJson")

        self.assertEqual(code, 1)
        self.manager.check_pod.assert_called_once_with(os.path.abspath(self.repo), "QtJson")

    def test_generate(self):
        self.manager.generate_qmake_files.return_value = True

        code, _, _ = self.run_cli("generate")

        self.assertEqual(code, 0)


if __name__ == '__main__':
    unittest.main()
