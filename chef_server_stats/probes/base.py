"""Base probe class and the failure-isolation wrapper."""

from abc import ABC, abstractmethod
from typing import Callable
import logging

from ..config.models import InstallationContext, StatsConfig
from ..utils.metrics import MetricReport, ProbeResult
from ..utils.verbosity import Verbosity


class ProbeError(Exception):
    """A probe decided its subsystem answered unusably (e.g. non-zero exit)."""


class BaseProbe(ABC):
    """
    Abstract base class for all probes.

    A probe queries one subsystem and returns a flat MetricReport. It may
    raise anything; run() converts failures into an empty result.
    """

    name: str = "base"

    def __init__(self, config: StatsConfig, logger: logging.Logger):
        """
        Initialize base probe.

        Args:
            config: Run configuration
            logger: Logger instance
        """
        self.config = config
        self.logger = logger.getChild(self.name)

    def is_applicable(self, context: InstallationContext) -> bool:
        """Whether the probe should run at all on this installation."""
        return True

    @abstractmethod
    def collect(self, context: InstallationContext) -> MetricReport:
        """
        Query the subsystem.

        Args:
            context: Resolved installation context

        Returns:
            MetricReport: Metrics keyed with the configured namespace

        Raises:
            Exception: Any collection error (caught by safe_invoke)
        """

    def fallback_metrics(self) -> MetricReport:
        """Metrics reported instead when collect() fails. Empty by default."""
        return {}

    def key(self, name: str) -> str:
        return self.config.metric_key(name)

    def run(self, context: InstallationContext, verbosity: Verbosity) -> ProbeResult:
        """Collect under safe_invoke."""
        return safe_invoke(self.name, lambda: self.collect(context), self.logger, verbosity)


def safe_invoke(
    name: str,
    func: Callable[[], MetricReport],
    logger: logging.Logger,
    verbosity: Verbosity = Verbosity.QUIET
) -> ProbeResult:
    """
    Run a probe body and never let its failure escape.

    Args:
        name: Probe name used in diagnostics
        func: Zero-argument callable returning a MetricReport
        logger: Logger for failure diagnostics
        verbosity: QUIET logs nothing, INFO logs "<name>: <error>",
            DEBUG adds the traceback

    Returns:
        ProbeResult: The metrics, or an empty failed result
    """
    try:
        metrics = func()
        if not isinstance(metrics, dict):
            raise ProbeError(f"returned {type(metrics).__name__}, expected a mapping")
        return ProbeResult(probe_name=name, metrics=dict(metrics))
    except Exception as e:
        if verbosity >= Verbosity.INFO:
            logger.warning(f"{name}: {e}", exc_info=verbosity >= Verbosity.DEBUG)
        return ProbeResult(probe_name=name, failed=True, error=str(e) or type(e).__name__)
