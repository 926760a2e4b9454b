from pydantic import BaseModel
from typing import Optional, Dict, List, Any


class UploadPreview(BaseModel):
    upload_id: str
    file_name: Optional[str] = None
    columns: List[str]
    sample_rows: List[Dict[str, Any]]
    total_rows: int


class UploadStats(BaseModel):
    upload_id: str
    file_name: Optional[str] = None
    total_rows: int
    total_cols: int
    file_size: int
    statistics: Dict[str, Dict[str, Optional[float]]]
