from pydantic import BaseModel
from typing import Optional, List, Dict, Any


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    role: str
    tier: Optional[str] = None
    user_metadata: Dict[str, Any] = {}
    permissions: List[str]
