"""Deployment constants and configuration.

This module centralizes all magic strings, paths, and configuration values
used throughout the deployment process.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DeploymentConstants:
    """Constants for CI Helm/Tiller deployment.

    This class provides a centralized location for all deployment-related
    constants, making them easy to find, update, and test.

    All attributes are class-level and immutable.
    """

    # kubeconfig identifiers
    CLUSTER_NAME: str = "ci_kube"
    CONTEXT_SUFFIX: str = "-deploy"

    # Local Tiller
    TILLER_STORAGE: str = "secret"
    HELM_HOST: str = "localhost:44134"
    TILLER_STARTUP_WAIT_SECONDS: float = 1.0

    # Rollout
    ROLLOUT_RESOURCE_TYPE: str = "deployment"
    ROLLOUT_SETTLE_SECONDS: float = 5.0

    # Chart location, relative to CI_PROJECT_DIR
    HELM_CHART_DIR: str = "helm-chart"

    # Environment variable groups checked before anything runs
    REQUIRED_ENVIRONMENT: tuple[str, ...] = (
        "CI_PROJECT_NAME",
        "CI_PROJECT_DIR",
        "CI_COMMIT_REF_SLUG",
        "CI_REGISTRY_IMAGE",
        "CI_ENVIRONMENT_NAME",
        "CI_JOB_ID",
        "CI_COMMIT_SHORT_SHA",
    )
    DEFAULT_ENVIRONMENT: tuple[str, ...] = ("WATCH_DEPLOYMENT:CI_ENVIRONMENT_SLUG",)
    CLUSTER_LOGIN_ENVIRONMENT: tuple[str, ...] = (
        "HELM_TOKEN",
        "HELM_USER",
        "PROJECT_NAMESPACE",
        "CLUSTER_SERVER",
    )
    IMAGE_PULL_ENVIRONMENT: tuple[str, ...] = (
        "CI_REGISTRY",
        "CI_DEPLOY_USER",
        "CI_DEPLOY_PASSWORD",
    )

    def context_name(self, namespace: str) -> str:
        """Get the kubeconfig context name for a namespace."""
        return f"{namespace}{self.CONTEXT_SUFFIX}"

    def tiller_env(self, namespace: str) -> dict[str, str]:
        """Environment that points the Helm client at the local Tiller."""
        return {"TILLER_NAMESPACE": namespace, "HELM_HOST": self.HELM_HOST}


class DeploymentPaths:
    """Path resolver for deployment-related directories and files.

    All paths are derived from the CI checkout directory and project name.
    A relative checkout directory is resolved against the current directory.
    """

    def __init__(self, project_dir: Path | str, project_name: str) -> None:
        """Initialize deployment paths.

        Args:
            project_dir: CI checkout directory (CI_PROJECT_DIR, empty for cwd)
            project_name: Project name (CI_PROJECT_NAME)
        """
        self.project_dir = Path(project_dir).resolve()
        self.project_name = project_name
        self._constants = DeploymentConstants()

    @property
    def helm_chart(self) -> Path:
        """Get path to the project's Helm chart."""
        return self.project_dir / self._constants.HELM_CHART_DIR / self.project_name
