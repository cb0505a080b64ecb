"""Helm value overrides derived from the CI environment."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..shell_commands import SetOverride

if TYPE_CHECKING:
    from .settings import DeploySettings


def deploy_arg_key(variable_name: str) -> str:
    """Turn an environment variable name into a dotted chart value key.

    Example:
        >>> deploy_arg_key("APP__TIMEOUT")
        'app.timeout'
    """
    return variable_name.replace("__", ".").lower()


def project_specific_deploy_args(settings: DeploySettings) -> list[SetOverride]:
    """Build overrides for the variables listed in PROJECT_SPECIFIC_DEPLOY_ARGS.

    Order follows the allowlist; an empty allowlist yields no overrides.
    """
    return [
        SetOverride(deploy_arg_key(name), settings.value(name))
        for name in settings.deploy_arg_names
    ]


def image_pull_settings(settings: DeploySettings) -> list[SetOverride]:
    """Build registry credential overrides.

    Public projects pull without credentials; everything else gets the
    registry root and deploy token credentials.
    """
    if settings.is_public:
        return []
    return [
        SetOverride("registry.root", settings.ci_registry),
        SetOverride("registry.secret.username", settings.ci_deploy_user),
        SetOverride("registry.secret.password", settings.ci_deploy_password),
    ]


def release_overrides(settings: DeploySettings) -> list[SetOverride]:
    """Overrides identifying the image and CI job behind a release."""
    return [
        SetOverride(
            "image.repository",
            f"{settings.ci_registry_image}/{settings.ci_project_name}",
        ),
        SetOverride("image.tag", settings.ci_commit_short_sha),
        SetOverride("environment", settings.ci_environment_name),
        SetOverride("git_commit", settings.ci_commit_short_sha, string=True),
        SetOverride("git_ref", settings.ci_commit_ref_slug),
        SetOverride("ci_job_id", settings.ci_job_id),
    ]


def deployment_name(settings: DeploySettings) -> str:
    """Resolve the release name: DEPLOYMENT_NAME, else ``<env slug>-<project>``."""
    if settings.deployment_name:
        return settings.deployment_name
    return f"{settings.ci_environment_slug}-{settings.ci_project_name}"
