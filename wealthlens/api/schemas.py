from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class BrokerageImportRequest(BaseModel):
    holdings: List[Dict[str, Any]] = Field(default_factory=list)
    sectors: Optional[Dict[str, str]] = None

class HistoryResponse(BaseModel):
    user_id: str
    count: int
    max_reports: int
    reports: List[Dict[str, Any]]
