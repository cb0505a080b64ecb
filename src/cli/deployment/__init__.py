"""Deployment module for CI-driven Helm releases.

The package is organized into subpackages for modularity:
- shell_commands: Abstractions for shell command execution
- helm_deployer: Components for the CI deployment pipeline
"""

from .helm_deployer import CIDeployer, DeploymentError, DeploySettings

__all__ = ["CIDeployer", "DeploySettings", "DeploymentError"]
