"""
Result Synthesizer - produces the result bundle for an analysis method.

No statistics are computed here: each supported method has a fixed
result shape (summary + details) that downstream consumers rely on.
Methods without an entry produce empty sections rather than an error.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from app.services.recommendation import MethodId


@dataclass
class ResultBundle:
    """Output of one analysis run"""
    method: str
    timestamp: datetime
    summary: Dict[str, Any] = field(default_factory=dict)
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method,
            "timestamp": self.timestamp.isoformat(),
            "summary": self.summary,
            "details": self.details,
        }


Sections = Tuple[Dict[str, Any], Dict[str, Any]]

FIXTURES: Dict[MethodId, Sections] = {
    MethodId.DESCRIPTIVE: (
        {
            "n": 100,
            "mean": 75.5,
            "median": 76,
            "mode": 78,
            "std_dev": 12.3,
            "min": 45,
            "max": 98,
            "range": 53,
        },
        {
            "distribution": "normal",
            "skewness": -0.15,
            "kurtosis": 2.8,
        },
    ),
    MethodId.CORRELATION: (
        {
            "correlation_coefficient": 0.72,
            "p_value": 0.001,
            "significance": "significant",
            "relationship": "positive strong",
        },
        {
            "r_squared": 0.518,
            "confidence_interval": [0.58, 0.82],
        },
    ),
    MethodId.REGRESSION: (
        {
            "r_squared": 0.65,
            "adjusted_r_squared": 0.64,
            "f_statistic": 45.2,
            "p_value": 0.0001,
        },
        {
            "coefficients": {"intercept": 25.3, "slope": 0.82},
            "residuals": {"mean": 0, "std_error": 8.5},
        },
    ),
    MethodId.TTEST: (
        {
            "t_statistic": 3.45,
            "p_value": 0.002,
            "significance": "significant",
            "effect_size": 0.68,
        },
        {
            "group1_mean": 72.3,
            "group2_mean": 78.9,
            "mean_difference": 6.6,
            "confidence_interval": [2.4, 10.8],
        },
    ),
}


def _empty_sections() -> Sections:
    return {}, {}


def synthesize(
    method: Any,
    input_data: Any = None,
    params: Optional[Mapping[str, Any]] = None,
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> ResultBundle:
    """
    Build the result bundle for ``method``.

    ``input_data`` and ``params`` are carried for future computation and do
    not affect the output. The timestamp is taken from ``clock`` at call
    time; everything else is a fresh copy of the method's fixture.
    """
    method_id = MethodId.parse(method)
    sections = FIXTURES.get(method_id) if method_id else None
    summary, details = copy.deepcopy(sections) if sections else _empty_sections()

    method_name = method_id.value if method_id else str(method)
    return ResultBundle(method=method_name, timestamp=clock(), summary=summary, details=details)
