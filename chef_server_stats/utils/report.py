"""Render a metric report as JSON."""

import json

from .metrics import MetricReport


def format_report(report: MetricReport, pretty: bool = False) -> str:
    """
    Serialize the merged report.

    Args:
        report: Flat metric mapping
        pretty: Multi-line indented output instead of a single line

    Returns:
        str: JSON document
    """
    if pretty:
        return json.dumps(report, indent=2)
    return json.dumps(report, separators=(',', ':'))
