from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class NominationBase(BaseModel):
    name: str
    course: str
    phone_no: str
    domain: str
    email: str
    insta_id: Optional[str] = None
    github_id: Optional[str] = None
    gender: str


class Nomination(NominationBase):
    id: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool


class NominationPage(BaseModel):
    nominations: List[Nomination]
    pagination: Pagination


class NominationStats(BaseModel):
    total_nominations: int
    by_domain: Dict[str, int]
    by_gender: Dict[str, int]
