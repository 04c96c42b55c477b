"""
Request bodies for the wizard routes.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class SelectDateRequest(_Request):
    selected_date: str = Field(alias="date")


class SelectServiceRequest(_Request):
    service_id: str


class GuestCountRequest(_Request):
    guest_count: int


class AdditionalHoursRequest(_Request):
    additional_hours: int
