"""Helm deployer package for CI deployments.

This package provides a modular approach to deploying a project's Helm
chart from a CI job, with each concern separated into its own module:

- settings: Immutable settings read once from the job environment
- environment: Validation of required environment variables
- overrides: Helm value overrides derived from the environment
- cluster_login: kubectl context configuration
- helm_init: Local Tiller lifecycle and Helm client initialization
- helm_release: Chart linting and release deployment
- rollout: Rollout monitoring

The CIDeployer class in deployer.py runs these components in order.

Usage:
    from src.cli.deployment.helm_deployer import CIDeployer, DeploySettings

    settings = DeploySettings.from_environ(os.environ)
    CIDeployer(console, settings, commands).run()
"""

from .cluster_login import ClusterLogin
from .constants import DeploymentConstants, DeploymentPaths
from .deployer import CIDeployer
from .dry_run import DryRunGate
from .environment import EnvironmentValidator
from .errors import (
    DeploymentError,
    ExternalCommandFailure,
    MissingDefaultableVariable,
    MissingRequiredVariable,
    ProcessLivenessFailure,
)
from .helm_init import HelmInitializer
from .helm_release import HelmReleaseManager
from .overrides import (
    deployment_name,
    image_pull_settings,
    project_specific_deploy_args,
)
from .rollout import RolloutWatcher
from .settings import DeploySettings

__all__ = [
    "CIDeployer",
    "DeploySettings",
    "DeploymentConstants",
    "DeploymentPaths",
    "DeploymentError",
    "MissingRequiredVariable",
    "MissingDefaultableVariable",
    "ExternalCommandFailure",
    "ProcessLivenessFailure",
    # Component classes for testing/extension
    "EnvironmentValidator",
    "DryRunGate",
    "ClusterLogin",
    "HelmInitializer",
    "HelmReleaseManager",
    "RolloutWatcher",
    "deployment_name",
    "image_pull_settings",
    "project_specific_deploy_args",
]
