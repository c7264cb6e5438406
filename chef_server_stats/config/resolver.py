"""Detect which server distribution is installed on this host."""

import logging
import os
from typing import Optional

from .models import Flavor, InstallationContext, InstallationPathsConfig


class InstallationNotFoundError(Exception):
    """Neither distribution's marker file exists; nothing can be probed."""


class InstallationResolver:
    """Build the InstallationContext from marker files on disk."""

    def __init__(self, paths: InstallationPathsConfig, logger: Optional[logging.Logger] = None):
        self.paths = paths
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self, hostname: str = "localhost") -> InstallationContext:
        """
        Inspect the marker files. The open source marker wins if both exist.

        Args:
            hostname: Target host for the HTTP probes

        Returns:
            InstallationContext: Immutable context for the run

        Raises:
            InstallationNotFoundError: If neither marker file exists
        """
        if os.path.exists(self.paths.open_source_marker):
            flavor = Flavor.OPEN_SOURCE
            embedded = self.paths.open_source_embedded_bin
        elif os.path.exists(self.paths.enterprise_marker):
            flavor = Flavor.ENTERPRISE
            embedded = self.paths.enterprise_embedded_bin
        else:
            raise InstallationNotFoundError(
                "Failed to determine chef server type, exiting (open-source or privatechef)"
            )

        self.logger.debug(f"Detected {flavor.value} install, embedded bin {embedded}")
        return InstallationContext(flavor=flavor, embedded_bin_path=embedded, hostname=hostname)
