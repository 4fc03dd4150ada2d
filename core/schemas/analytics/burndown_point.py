"""Burndown chart schema."""

import datetime as dt

from core.schemas.base_schema_model import BaseSchemaModel


class BurndownPoint(BaseSchemaModel):
    """One day of a burndown chart; ``actual`` always equals ``remaining``."""

    date: dt.date
    ideal: float
    actual: int
    remaining: int
