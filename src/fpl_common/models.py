"""Shared base for domain records.

Domain records travel through the cache as camelCase JSON (the format the
feed producers write), so every record model aliases its snake_case fields.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
