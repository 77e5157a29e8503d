"""Anonymized per-disease counts."""

from collections import Counter
from collections.abc import Mapping
from typing import Any, Dict, Iterable


def _disease_of(report: Any) -> str:
    if isinstance(report, Mapping):
        return report["disease"]
    return report.disease


def summarize(reports: Iterable[Any]) -> Dict[str, int]:
    """
    Count reports per disease.

    Keys are the exact ``disease`` values: "Flu" and "flu " are distinct.
    Order follows first appearance.
    """
    return dict(Counter(_disease_of(report) for report in reports))
