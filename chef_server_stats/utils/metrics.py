"""Metric report data structures and value normalization."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Union
import logging
import math


Scalar = Union[int, float, str]
MetricReport = Dict[str, Scalar]


@dataclass
class ProbeResult:
    """Outcome of one probe invocation."""

    probe_name: str
    metrics: MetricReport = field(default_factory=dict)
    failed: bool = False
    error: Optional[str] = None


def merge_reports(reports: Iterable[MetricReport]) -> MetricReport:
    """
    Merge reports left to right.

    Later reports overwrite earlier ones on key collision. No deep merge.

    Args:
        reports: Reports in merge order

    Returns:
        MetricReport: New merged report
    """
    merged: MetricReport = {}
    for report in reports:
        merged.update(report)
    return merged


def to_int(value: Any) -> int:
    """
    Convert a counter value to int.

    Accepts ints, integral floats and numeric strings ("42", " 42\\n", "42.0").

    Raises:
        ValueError: If the value is not numeric
        TypeError: If the value is None or another non-scalar
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if not isinstance(value, str):
        raise TypeError(f"Cannot convert {type(value).__name__} to int")
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        return int(float(text))


def to_float(value: Any) -> float:
    """Convert an average/ratio value to a finite float."""
    if value is None or isinstance(value, (dict, list)):
        raise TypeError(f"Cannot convert {type(value).__name__} to float")
    if isinstance(value, str):
        value = value.strip()
    result = float(value)
    # NaN and Infinity have no JSON representation
    if not math.isfinite(result):
        raise ValueError(f"Non-finite value {result!r}")
    return result


def add_metric(
    stats: MetricReport,
    key: str,
    value: Any,
    converter=to_int,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Normalize a raw value and store it under key.

    Values that are missing or cannot be converted are dropped so a single
    odd field never poisons the rest of the probe's output.

    Args:
        stats: Report to update in place
        key: Fully qualified metric key
        value: Raw value as returned by the subsystem
        converter: to_int for counters, to_float for averages
        logger: Optional logger for dropped values
    """
    try:
        stats[key] = converter(value)
    except (TypeError, ValueError, OverflowError) as e:
        if logger:
            logger.debug(f"Dropping {key}: unusable value {value!r} ({e})")
