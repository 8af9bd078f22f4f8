"""
Query string construction

Bounding box formatting and the changeset query filters, validated before
any request is sent.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence
from urllib.parse import quote

from ..errors import ValidationError
from .models import Bounds


def validate_bounds(bounds: Bounds) -> None:
    """
    Check that bounds are finite, within range and not inverted

    Raises:
        ValidationError: Describing the first problem found
    """
    if bounds is None:
        raise ValidationError("Bounds are required")

    values = {
        "min_lon": bounds.min_lon,
        "min_lat": bounds.min_lat,
        "max_lon": bounds.max_lon,
        "max_lat": bounds.max_lat,
    }
    for name, value in values.items():
        if value is None:
            raise ValidationError(f"Bounds {name} is not set")
        if not math.isfinite(value):
            raise ValidationError(f"Bounds {name} must be finite, got {value}")

    for name in ("min_lon", "max_lon"):
        if not -180 <= values[name] <= 180:
            raise ValidationError(f"Bounds {name} must be within [-180, 180], got {values[name]}")
    for name in ("min_lat", "max_lat"):
        if not -90 <= values[name] <= 90:
            raise ValidationError(f"Bounds {name} must be within [-90, 90], got {values[name]}")

    if bounds.min_lon > bounds.max_lon:
        raise ValidationError(f"Bounds min_lon {bounds.min_lon} is greater than max_lon {bounds.max_lon}")
    if bounds.min_lat > bounds.max_lat:
        raise ValidationError(f"Bounds min_lat {bounds.min_lat} is greater than max_lat {bounds.max_lat}")


def format_bbox(bounds: Bounds) -> str:
    """Format bounds as "minlon,minlat,maxlon,maxlat" at 7 decimal places"""
    return ",".join(
        f"{value:.7f}"
        for value in (bounds.min_lon, bounds.min_lat, bounds.max_lon, bounds.max_lat)
    )


def _format_time(value: datetime) -> str:
    return value.isoformat()


@dataclass
class ChangesetQuery:
    """Filters for GET /api/0.6/changesets"""
    bounds: Optional[Bounds] = None
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    min_closed_date: Optional[datetime] = None
    max_opened_date: Optional[datetime] = None
    open_only: bool = False
    closed_only: bool = False
    changeset_ids: Optional[Sequence[int]] = None

    def validate(self) -> None:
        if self.user_id is not None and self.user_name is not None:
            raise ValidationError("Query can only specify user_id OR user_name, not both.")
        if self.open_only and self.closed_only:
            raise ValidationError("Query can only specify open_only OR closed_only, not both.")
        if self.min_closed_date is None and self.max_opened_date is not None:
            raise ValidationError("Query must specify min_closed_date if max_opened_date is specified.")
        if self.bounds is not None:
            validate_bounds(self.bounds)

    def to_query_string(self) -> str:
        """Build the query string (without the leading "?")"""
        self.validate()
        params: List[str] = []

        if self.bounds is not None:
            params.append("bbox=" + format_bbox(self.bounds))

        if self.user_id is not None:
            params.append(f"user={self.user_id}")
        elif self.user_name is not None:
            params.append("display_name=" + quote(self.user_name, safe=""))

        if self.min_closed_date is not None:
            time = _format_time(self.min_closed_date)
            if self.max_opened_date is not None:
                time += "," + _format_time(self.max_opened_date)
            params.append("time=" + quote(time, safe=",:"))

        if self.open_only:
            params.append("open=true")
        elif self.closed_only:
            params.append("closed=true")

        if self.changeset_ids is not None:
            params.append("changesets=" + ",".join(str(i) for i in self.changeset_ids))

        return "&".join(params)
