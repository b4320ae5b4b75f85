"""Prometheus metrics for monitoring."""

from prometheus_client import Counter

validations_total = Counter(
    "wenshi_validations_total", "Total number of content validations", ["result"])

parse_total = Counter(
    "wenshi_parse_total", "Total number of .wen envelopes parsed", ["result"])
serialize_total = Counter(
    "wenshi_serialize_total", "Total number of .wen envelopes serialized", ["result"])

file_operations_total = Counter(
    "wenshi_file_operations_total", "Total number of host file operations", ["op"])


def track_validation(is_valid: bool) -> None:
    """Count one content validation by its result."""
    validations_total.labels(result="valid" if is_valid else "invalid").inc()
