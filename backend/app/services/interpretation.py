"""
Interpretation Generator - narrates a result bundle in Indonesian.

Each method with a narrator turns its summary numbers into one or two
sentences. Methods without a narrator, and bundles lacking the numbers a
narrator reports, get the placeholder text. This function never raises.
"""

from typing import Any, Callable, Dict, Mapping, Union

from app.core.logging_config import logger
from app.services.recommendation import MethodId
from app.services.result_synthesizer import ResultBundle


PLACEHOLDER = "Interpretasi hasil analisis akan ditampilkan di sini."

SIGNIFICANCE_LEVEL = 0.05


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return value


def _num(value: Any) -> str:
    """Render a number the way it was supplied: 76 not 76.0, 0.72 not 0.7200"""
    value = _number(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _tier(value: float, strong: float, moderate: float, labels: tuple) -> str:
    if value > strong:
        return labels[0]
    if value > moderate:
        return labels[1]
    return labels[2]


def _descriptive(summary: Mapping[str, Any], details: Mapping[str, Any]) -> str:
    is_normal = details.get("distribution") == "normal"
    return (
        f"Berdasarkan analisis deskriptif, data menunjukkan nilai rata-rata {_num(summary['mean'])} "
        f"dengan standar deviasi {_num(summary['std_dev'])}. "
        f"Distribusi data {'mendekati normal' if is_normal else 'tidak normal'}, "
        f"yang {'memungkinkan' if is_normal else 'membatasi'} penggunaan analisis parametrik."
    )


def _correlation(summary: Mapping[str, Any], details: Mapping[str, Any]) -> str:
    r = summary["correlation_coefficient"]
    p = summary["p_value"]
    strength = _tier(abs(r), 0.7, 0.4, ("kuat", "sedang", "lemah"))
    direction = "positif" if r > 0 else "negatif"
    significant = summary.get("significance") == "significant"
    return (
        f"Terdapat korelasi {direction} yang {strength} (r = {_num(r)}) "
        f"antara variabel independen dan dependen. "
        f"Hubungan ini {'signifikan secara statistik' if significant else 'tidak signifikan'} (p = {_num(p)})."
    )


def _regression(summary: Mapping[str, Any], details: Mapping[str, Any]) -> str:
    r_squared = _number(summary["r_squared"])
    f_statistic = summary["f_statistic"]
    p = summary["p_value"]
    significant = p < SIGNIFICANCE_LEVEL
    return (
        f"Model regresi menjelaskan {r_squared * 100:.1f}% variasi dalam variabel dependen. "
        f"Model ini {'signifikan secara statistik' if significant else 'tidak signifikan'} "
        f"(F = {_num(f_statistic)}, p = {_num(p)})."
    )


def _ttest(summary: Mapping[str, Any], details: Mapping[str, Any]) -> str:
    t = summary["t_statistic"]
    p = summary["p_value"]
    d = summary["effect_size"]
    significant = summary.get("significance") == "significant"
    effect = _tier(d, 0.8, 0.5, ("besar", "sedang", "kecil"))
    return (
        f"Terdapat perbedaan {'signifikan' if significant else 'tidak signifikan'} antara kedua kelompok "
        f"(t = {_num(t)}, p = {_num(p)}). Effect size {effect} (d = {_num(d)})."
    )


Narrator = Callable[[Mapping[str, Any], Mapping[str, Any]], str]

NARRATORS: Dict[MethodId, Narrator] = {
    MethodId.DESCRIPTIVE: _descriptive,
    MethodId.CORRELATION: _correlation,
    MethodId.REGRESSION: _regression,
    MethodId.TTEST: _ttest,
}


def _sections(results: Union[ResultBundle, Mapping[str, Any], None]):
    if isinstance(results, ResultBundle):
        return results.summary, results.details
    if isinstance(results, Mapping):
        summary = results.get("summary") or {}
        details = results.get("details") or {}
        if isinstance(summary, Mapping) and isinstance(details, Mapping):
            return summary, details
    return {}, {}


def interpret(method: Any, results: Union[ResultBundle, Mapping[str, Any], None]) -> str:
    """Human-readable interpretation of ``results`` for ``method``"""
    method_id = MethodId.parse(method)
    narrator = NARRATORS.get(method_id) if method_id else None
    if narrator is None:
        return PLACEHOLDER

    summary, details = _sections(results)
    try:
        return narrator(summary, details)
    except (KeyError, TypeError, ValueError) as e:
        logger.debug(f"[Interpretation] {method_id.value} bundle incomplete ({e!r}), using placeholder")
        return PLACEHOLDER
