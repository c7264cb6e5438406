"""Chef server API access through knife.

knife already holds the client key and signs requests, so the collector never
handles API credentials itself.
"""

import json
import logging
from typing import Any, List, Optional

from .command_runner import CommandRunner


class ChefApiError(Exception):
    """knife could not complete an API request."""


class KnifeApiClient:
    """Issue read-only GET requests to the Chef API via ``knife raw``."""

    def __init__(
        self,
        runner: CommandRunner,
        knife_bin: str = "knife",
        knife_config: Optional[str] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.runner = runner
        self.knife_bin = knife_bin
        self.knife_config = knife_config
        self.logger = logger or logging.getLogger(__name__)

    def _command(self, path: str) -> List[str]:
        args = [self.knife_bin, "raw", "--method", "GET", path]
        if self.knife_config:
            args.extend(["--config", self.knife_config])
        return args

    def get(self, path: str) -> Any:
        """
        GET an API path and return the decoded JSON body.

        Args:
            path: API path, with or without leading slash (e.g. "nodes")

        Returns:
            Decoded JSON document

        Raises:
            ChefApiError: If knife exits non-zero or prints something that isn't JSON
        """
        if not path.startswith('/'):
            path = f"/{path}"

        result = self.runner.run(self._command(path))
        if not result.ok:
            raise ChefApiError(
                f"knife raw {path} exited {result.exit_status}: {result.stderr.strip()}"
            )

        try:
            return json.loads(result.stdout)
        except ValueError as e:
            raise ChefApiError(f"knife raw {path} returned invalid JSON: {e}") from e

    def count(self, collection: str) -> int:
        """Number of entries in a collection endpoint such as /nodes."""
        body = self.get(collection)
        if not isinstance(body, (dict, list)):
            raise ChefApiError(f"Unexpected /{collection} payload: {type(body).__name__}")
        return len(body)
