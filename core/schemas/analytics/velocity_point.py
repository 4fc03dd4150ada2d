"""Task velocity schema."""

import datetime as dt

from core.schemas.base_schema_model import BaseSchemaModel


class VelocityPoint(BaseSchemaModel):
    """Activity of one calendar day.

    ``in_progress`` counts tasks created on or before the day whose current
    status is IN_PROGRESS; no status history is kept, so it is not the
    historical value for that day.
    """

    date: dt.date
    created: int = 0
    completed: int = 0
    in_progress: int = 0
