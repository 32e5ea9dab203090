"""Shared base model for records exchanged with the backend"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """
    Base for every model in taskquest

    Accepts snake_case names or the backend's camelCase JSON keys and
    serializes to camelCase with ``model_dump(by_alias=True)``.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
