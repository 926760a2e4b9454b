from pydantic import BaseModel, ConfigDict
from typing import Optional


class ProjectCreate(BaseModel):
    title: Optional[str] = None
    research_type: Optional[str] = None
    description: Optional[str] = None
    hypothesis: Optional[str] = None
    var_independent: Optional[str] = None
    var_dependent: Optional[str] = None


class ProjectUpdate(BaseModel):
    """Partial update; unknown and protected columns are dropped"""
    title: Optional[str] = None
    research_type: Optional[str] = None
    description: Optional[str] = None
    hypothesis: Optional[str] = None
    var_independent: Optional[str] = None
    var_dependent: Optional[str] = None
    status: Optional[str] = None

    model_config = ConfigDict(extra="ignore")
