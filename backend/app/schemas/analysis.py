from pydantic import BaseModel, ConfigDict
from typing import Optional, Dict, List, Any, Union


VariableInput = Union[str, List[str], None]


class RecommendRequest(BaseModel):
    # Any value is accepted; anything outside the known types yields no recommendations
    research_type: Any = None
    hypothesis: Optional[str] = None
    var_independent: VariableInput = None
    var_dependent: VariableInput = None
    data_summary: Optional[Dict[str, Any]] = None


class RecommendationItem(BaseModel):
    method: str
    name: str
    description: str
    suitability: str
    reason: str


class RecommendationList(BaseModel):
    recommendations: List[RecommendationItem]


class ProcessRequest(BaseModel):
    project_id: Union[str, int, None] = None
    upload_id: Union[str, int, None] = None
    method: Optional[str] = None
    params: Optional[Dict[str, Any]] = None
    data: Any = None

    model_config = ConfigDict(extra="ignore")


class AnalysisUpdate(BaseModel):
    status: Optional[str] = None
    notes: Optional[str] = None
