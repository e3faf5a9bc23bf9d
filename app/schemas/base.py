"""
Shared base for API schemas.

The API speaks camelCase (numEmployees, logoUrl, companyHandle) while Python
attributes stay snake_case.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema with camelCase aliases; accepts either spelling on input."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
