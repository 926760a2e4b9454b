"""
Recommendation Rule Table - maps a research context to candidate methods (NO statistics)

Given the research type and which variable sets a project declares, returns
an ordered list of analysis methods with a suitability tier and the reason
it is suggested. The order is part of the contract: clients show the list
as-is, most important first.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass, asdict


class ResearchType(str, Enum):
    QUANTITATIVE = "quantitative"
    QUALITATIVE = "qualitative"
    MIXED = "mixed"


class MethodId(str, Enum):
    """Closed set of analysis methods the platform knows about"""
    DESCRIPTIVE = "descriptive"
    CORRELATION = "correlation"
    REGRESSION = "regression"
    TTEST = "ttest"
    ANOVA = "anova"
    THEMATIC = "thematic"
    CONTENT = "content"
    TRIANGULATION = "triangulation"

    @classmethod
    def parse(cls, value: Any) -> Optional["MethodId"]:
        """Return the member for ``value``, or None for anything unknown"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class Suitability(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Recommendation:
    """One suggested method with its display texts"""
    method: MethodId
    name: str
    description: str
    suitability: Suitability
    reason: str

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data["method"] = self.method.value
        data["suitability"] = self.suitability.value
        return data


VariableSet = Union[None, str, Sequence[str]]


# Catalog entries, keyed by (research type, method). Mixed-methods projects get
# their own wording for descriptive/thematic.
CATALOG: Dict[Tuple[ResearchType, MethodId], Recommendation] = {
    (ResearchType.QUANTITATIVE, MethodId.DESCRIPTIVE): Recommendation(
        MethodId.DESCRIPTIVE,
        "Statistik Deskriptif",
        "Analisis dasar untuk mengetahui karakteristik data (mean, median, modus, standar deviasi)",
        Suitability.HIGH,
        "Langkah pertama yang wajib dilakukan sebelum analisis lebih lanjut",
    ),
    (ResearchType.QUANTITATIVE, MethodId.CORRELATION): Recommendation(
        MethodId.CORRELATION,
        "Analisis Korelasi",
        "Menguji hubungan antara dua variabel numerik",
        Suitability.HIGH,
        "Cocok untuk menguji hubungan antar variabel yang Anda tentukan",
    ),
    (ResearchType.QUANTITATIVE, MethodId.REGRESSION): Recommendation(
        MethodId.REGRESSION,
        "Analisis Regresi",
        "Memprediksi variabel dependen berdasarkan variabel independen",
        Suitability.MEDIUM,
        "Berguna jika ingin memprediksi atau menjelaskan pengaruh variabel",
    ),
    (ResearchType.QUANTITATIVE, MethodId.TTEST): Recommendation(
        MethodId.TTEST,
        "Uji T (T-Test)",
        "Membandingkan rata-rata dua kelompok",
        Suitability.MEDIUM,
        "Cocok jika Anda memiliki dua kelompok yang ingin dibandingkan",
    ),
    (ResearchType.QUANTITATIVE, MethodId.ANOVA): Recommendation(
        MethodId.ANOVA,
        "ANOVA",
        "Membandingkan rata-rata tiga kelompok atau lebih",
        Suitability.MEDIUM,
        "Cocok jika Anda memiliki lebih dari dua kelompok",
    ),
    (ResearchType.QUALITATIVE, MethodId.THEMATIC): Recommendation(
        MethodId.THEMATIC,
        "Analisis Tematik",
        "Mengidentifikasi tema dan pola dalam data kualitatif",
        Suitability.HIGH,
        "Metode utama untuk analisis data kualitatif",
    ),
    (ResearchType.QUALITATIVE, MethodId.CONTENT): Recommendation(
        MethodId.CONTENT,
        "Analisis Konten",
        "Mengkategorikan dan menghitung frekuensi kata atau tema",
        Suitability.MEDIUM,
        "Berguna untuk data teks yang terstruktur",
    ),
    (ResearchType.MIXED, MethodId.DESCRIPTIVE): Recommendation(
        MethodId.DESCRIPTIVE,
        "Statistik Deskriptif",
        "Analisis dasar untuk data kuantitatif",
        Suitability.HIGH,
        "Langkah pertama untuk komponen kuantitatif",
    ),
    (ResearchType.MIXED, MethodId.THEMATIC): Recommendation(
        MethodId.THEMATIC,
        "Analisis Tematik",
        "Analisis untuk data kualitatif",
        Suitability.HIGH,
        "Langkah pertama untuk komponen kualitatif",
    ),
    (ResearchType.MIXED, MethodId.TRIANGULATION): Recommendation(
        MethodId.TRIANGULATION,
        "Triangulasi",
        "Menggabungkan temuan kuantitatif dan kualitatif",
        Suitability.HIGH,
        "Penting untuk mixed methods research",
    ),
}

# Ordered rules per research type: (method, needs both variable sets)
RULES: Dict[ResearchType, List[Tuple[MethodId, bool]]] = {
    ResearchType.QUANTITATIVE: [
        (MethodId.DESCRIPTIVE, False),
        (MethodId.CORRELATION, True),
        (MethodId.REGRESSION, True),
        (MethodId.TTEST, False),
        (MethodId.ANOVA, False),
    ],
    ResearchType.QUALITATIVE: [
        (MethodId.THEMATIC, False),
        (MethodId.CONTENT, False),
    ],
    ResearchType.MIXED: [
        (MethodId.DESCRIPTIVE, False),
        (MethodId.THEMATIC, False),
        (MethodId.TRIANGULATION, False),
    ],
}


def normalize_variables(variables: VariableSet) -> List[str]:
    """
    Turn a variable set into an ordered list of non-blank names.

    Projects keep variables as free text ("usia, pendapatan"), API clients
    may send a list; both shapes are accepted.
    """
    if variables is None:
        return []
    if isinstance(variables, str):
        items = variables.split(",")
    else:
        items = [str(v) for v in variables if v is not None]
    return [item.strip() for item in items if item.strip()]


def parse_research_type(value: Any) -> Optional[ResearchType]:
    if isinstance(value, ResearchType):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ResearchType(value)
    except ValueError:
        return None


def recommend(
    research_type: Any,
    hypothesis: Optional[str] = None,
    independent_vars: VariableSet = None,
    dependent_vars: VariableSet = None,
    data_summary: Optional[Dict[str, Any]] = None,
) -> List[Recommendation]:
    """
    Ordered method recommendations for a research context.

    ``hypothesis`` and ``data_summary`` do not influence the result yet; they
    are accepted so callers can pass the full context. An unknown research
    type yields an empty list.
    """
    rtype = parse_research_type(research_type)
    if rtype is None:
        return []

    has_both_sets = bool(normalize_variables(independent_vars)) and bool(normalize_variables(dependent_vars))

    recommendations = []
    for method, needs_variables in RULES[rtype]:
        if needs_variables and not has_both_sets:
            continue
        recommendations.append(CATALOG[(rtype, method)])
    return recommendations
