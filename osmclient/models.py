"""
Pydantic models for OSM API server metadata
Field names follow the XML attribute names of the API v0.6 responses
"""

from datetime import datetime
from typing import List, Optional, Dict
from pydantic import BaseModel, Field


# ============================================================
# Changesets
# ============================================================

class ChangesetComment(BaseModel):
    id: Optional[int] = None
    date: Optional[datetime] = None
    uid: Optional[int] = None
    user: Optional[str] = None
    text: str = ""


class Changeset(BaseModel):
    id: int
    created_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    open: bool = False
    user: Optional[str] = None
    uid: Optional[int] = None
    min_lat: Optional[float] = None
    min_lon: Optional[float] = None
    max_lat: Optional[float] = None
    max_lon: Optional[float] = None
    comments_count: int = 0
    changes_count: Optional[int] = None
    tags: Dict[str, str] = Field(default_factory=dict)
    discussion: List[ChangesetComment] = Field(default_factory=list)


# ============================================================
# Capabilities
# ============================================================

class Capabilities(BaseModel):
    version_minimum: Optional[float] = None
    version_maximum: Optional[float] = None
    area_maximum: Optional[float] = None  # square degrees for map requests
    note_area_maximum: Optional[float] = None
    tracepoints_per_page: Optional[int] = None
    waynodes_maximum: Optional[int] = None
    relationmembers_maximum: Optional[int] = None
    changesets_maximum_elements: Optional[int] = None
    changesets_default_query_limit: Optional[int] = None
    changesets_maximum_query_limit: Optional[int] = None
    timeout_seconds: Optional[int] = None
    status_database: Optional[str] = None
    status_api: Optional[str] = None
    status_gpx: Optional[str] = None
    imagery_blacklist: List[str] = Field(default_factory=list)
