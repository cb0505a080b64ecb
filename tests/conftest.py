from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
from loguru import logger

from src.cli.deployment.helm_deployer.settings import DeploySettings
from src.cli.deployment.shell_commands import CommandResult
from src.cli.shared.console import CLIConsole, LogLevel


@pytest.fixture(autouse=True)
def _reset_loguru():
    """Drop sinks bound to streams that only lived for one test."""
    yield
    logger.remove()


# A complete environment for a private project, as a CI job would provide it
CI_ENVIRONMENT: dict[str, str] = {
    "LOG_LEVEL": "info",
    "PROJECT_NAMESPACE": "shop",
    "HELM_TOKEN": "s3cr3t-token",
    "HELM_USER": "ci-deployer",
    "CLUSTER_SERVER": "https://k8s.example.com:6443",
    "CI_PROJECT_NAME": "storefront",
    "CI_PROJECT_DIR": "/builds/shop/storefront",
    "CI_COMMIT_REF_SLUG": "main",
    "CI_REGISTRY_IMAGE": "registry.example.com/shop",
    "CI_ENVIRONMENT_NAME": "review/main",
    "CI_ENVIRONMENT_SLUG": "review-main",
    "CI_JOB_ID": "4242",
    "CI_COMMIT_SHORT_SHA": "abc1234",
    "CI_PROJECT_VISIBILITY": "private",
    "CI_REGISTRY": "registry.example.com",
    "CI_DEPLOY_USER": "gitlab+deploy-token-1",
    "CI_DEPLOY_PASSWORD": "deploy-pass",
}


@pytest.fixture
def ci_environment() -> dict[str, str]:
    """A mutable copy of a complete CI environment."""
    return dict(CI_ENVIRONMENT)


@pytest.fixture
def make_settings(
    ci_environment: dict[str, str],
) -> Callable[..., DeploySettings]:
    """Build settings from the CI environment with overrides.

    Passing None for a variable removes it from the environment.
    """

    def _make(**overrides: Any) -> DeploySettings:
        environ = dict(ci_environment)
        for name, value in overrides.items():
            if value is None:
                environ.pop(name, None)
            else:
                environ[name] = value
        return DeploySettings.from_environ(environ)

    return _make


@pytest.fixture
def mock_console() -> MagicMock:
    """Create a mock CLI console."""
    return MagicMock(spec=CLIConsole)


@pytest.fixture
def quiet_console() -> CLIConsole:
    """A real console that emits nothing."""
    return CLIConsole(level=LogLevel.UNRECOGNIZED)


@pytest.fixture
def ok_result() -> CommandResult:
    return CommandResult(success=True, stdout="", stderr="", returncode=0)


@pytest.fixture
def failed_result() -> CommandResult:
    return CommandResult(success=False, stdout="", stderr="boom", returncode=1)


@pytest.fixture
def mock_commands(ok_result: CommandResult) -> MagicMock:
    """Create a mock shell commands instance where every command succeeds."""
    commands = MagicMock()
    commands.helm.init_client_only.return_value = ok_result
    commands.helm.repo_update.return_value = ok_result
    commands.helm.lint.return_value = ok_result
    commands.helm.upgrade_install.return_value = ok_result
    commands.kubectl.set_cluster.return_value = ok_result
    commands.kubectl.set_credentials.return_value = ok_result
    commands.kubectl.set_context.return_value = ok_result
    commands.kubectl.use_context.return_value = ok_result
    commands.kubectl.rollout_status.return_value = ok_result
    commands.kubectl.get_pods.return_value = ok_result
    commands.kubectl.describe.return_value = ok_result

    tiller = MagicMock()
    tiller.pid = 31337
    tiller.is_alive.return_value = True
    tiller.terminate.return_value = True
    commands.tiller.start.return_value = tiller
    return commands
