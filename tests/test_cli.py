import json

import pytest
import yaml
from click.testing import CliRunner
from unittest.mock import AsyncMock, MagicMock, patch

from scenario_runner import __version__
from scenario_runner.cli import cli
from scenario_runner.core import RunResult, RunStatus, ScenarioDefinitionError, StepOutcome, StepStatus


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    return str(tmp_path / "missing.yaml")


def make_result(status):
    outcomes = [StepOutcome("loginBO", "should login in BO", StepStatus.PASSED, scenario="root")]
    if status != RunStatus.PASSED:
        outcomes.append(StepOutcome(
            "sortByNameDesc", "should sort by 'Name, Z to A'", StepStatus.FAILED,
            scenario="root", error="List not sorted",
        ))
    return RunResult(run_id="abc12345", scenario="root", status=status, outcomes=outcomes)


class TestCli:
    """Test the command line interface"""

    def test_version(self, runner, config_file):
        result = runner.invoke(cli, ['-c', config_file, 'version'])

        assert result.exit_code == 0
        assert __version__ in result.output
        assert "sort-products" in result.output

    def test_campaigns(self, runner, config_file):
        result = runner.invoke(cli, ['-c', config_file, 'campaigns'])

        assert result.exit_code == 0
        assert result.output.startswith("sort-products")

    def test_init_writes_default_config(self, runner, config_file, tmp_path):
        target = tmp_path / "scenario-runner.yaml"

        result = runner.invoke(cli, ['-c', config_file, 'init', str(target)])

        assert result.exit_code == 0
        with open(target) as f:
            written = yaml.safe_load(f)
        assert written['session']['browser'] == 'chromium'
        assert written['storefront']['theme'] == 'hummingbird'

    def test_init_refuses_existing_file(self, runner, config_file, tmp_path):
        target = tmp_path / "scenario-runner.yaml"
        target.write_text("general: {}\n")

        result = runner.invoke(cli, ['-c', config_file, 'init', str(target)])

        assert result.exit_code == 1
        assert target.read_text() == "general: {}\n"

    def test_run_unknown_campaign(self, runner, config_file):
        result = runner.invoke(cli, ['-c', config_file, 'run', 'checkout'])

        assert result.exit_code == 2
        assert "Unknown campaign" in result.output

    @patch('scenario_runner.cli.ScenarioEngine')
    def test_run_passing_campaign(self, mock_engine, runner, config_file, tmp_path):
        mock_engine.return_value.run = AsyncMock(return_value=make_result(RunStatus.PASSED))

        result = runner.invoke(cli, [
            '-c', config_file, 'run', 'sort-products',
            '--headed', '--browser', 'firefox', '-f', 'json', '-o', str(tmp_path / 'reports'),
        ])

        assert result.exit_code == 0, result.output
        assert "Status: passed" in result.output

        session_manager = mock_engine.call_args.kwargs['session_manager']
        assert session_manager.config.headless == False
        assert session_manager.config.browser == 'firefox'

        reports = list((tmp_path / 'reports').glob('report_abc12345_*.json'))
        assert len(reports) == 1
        with open(reports[0]) as f:
            assert json.load(f)['status'] == 'passed'

    @patch('scenario_runner.cli.ScenarioEngine')
    def test_run_failing_campaign_exits_non_zero(self, mock_engine, runner, config_file, tmp_path):
        mock_engine.return_value.run = AsyncMock(return_value=make_result(RunStatus.FAILED))

        result = runner.invoke(cli, [
            '-c', config_file, 'run', 'sort-products', '-f', 'junit', '-o', str(tmp_path),
        ])

        assert result.exit_code == 1
        assert "sortByNameDesc" in result.output
        assert "List not sorted" in result.output
        assert list(tmp_path.glob('report_abc12345_*.xml'))

    def test_init_ignores_loaded_config(self, runner, tmp_path):
        custom = tmp_path / "custom.yaml"
        custom.write_text("storefront:\n  theme: mytheme\n  admin_password: secret\n")
        target = tmp_path / "fresh.yaml"

        result = runner.invoke(cli, ['-c', str(custom), 'init', str(target)])

        assert result.exit_code == 0
        with open(target) as f:
            written = yaml.safe_load(f)
        assert written['storefront']['theme'] == 'hummingbird'
        assert written['storefront']['admin_password'] != 'secret'

    @patch('scenario_runner.cli.ScenarioEngine')
    def test_run_rejects_unknown_configured_format(self, mock_engine, runner, tmp_path):
        custom = tmp_path / "custom.yaml"
        custom.write_text("reporter:\n  formats: [html, pdf]\n")

        result = runner.invoke(cli, ['-c', str(custom), 'run', 'sort-products'])

        assert result.exit_code == 2
        assert "pdf" in result.output
        mock_engine.return_value.run.assert_not_called()

    @patch('scenario_runner.cli.ScenarioEngine')
    def test_run_reports_definition_error(self, mock_engine, runner, config_file, tmp_path):
        mock_engine.return_value.run = AsyncMock(side_effect=ScenarioDefinitionError("Duplicate step identifier 'loginBO'"))

        result = runner.invoke(cli, ['-c', config_file, 'run', 'sort-products', '-o', str(tmp_path)])

        assert result.exit_code == 2
        assert "Duplicate step identifier" in result.output
