"""Tests for the post-edit mix commands."""

import subprocess
from unittest.mock import patch

from core.build import run_build_steps
from core.config import Settings


def completed(command, returncode=0):
    return subprocess.CompletedProcess(args=command, returncode=returncode)


class TestRunBuildSteps:
    """Test running deps.get and format."""

    def test_runs_deps_get_then_format(self, tmp_path):
        settings = Settings(project_dir=tmp_path, mix_command="mix")
        with patch("core.build.subprocess.run") as mock_run:
            mock_run.side_effect = lambda command, cwd: completed(command)

            results = run_build_steps(settings)

        assert [call.args[0] for call in mock_run.call_args_list] == [
            ["mix", "deps.get"],
            ["mix", "format"],
        ]
        assert all(call.kwargs["cwd"] == tmp_path for call in mock_run.call_args_list)
        assert all(step.ok for step in results)

    def test_failure_does_not_stop_later_steps(self, tmp_path):
        settings = Settings(project_dir=tmp_path)
        with patch("core.build.subprocess.run") as mock_run:
            mock_run.side_effect = [completed(["mix", "deps.get"], 1), completed(["mix", "format"])]

            results = run_build_steps(settings)

        assert mock_run.call_count == 2
        assert not results[0].ok
        assert results[0].error == "exited with status 1"
        assert results[1].ok

    def test_launch_failure_is_captured(self, tmp_path):
        settings = Settings(project_dir=tmp_path, mix_command="missing-mix")
        with patch("core.build.subprocess.run", side_effect=FileNotFoundError("missing-mix")):
            results = run_build_steps(settings)

        assert len(results) == 2
        assert all(not step.ok for step in results)
        assert "missing-mix" in results[0].error
