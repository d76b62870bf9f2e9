"""Base models translating between the camelCase wire format and snake_case attributes."""
from pydantic import AliasGenerator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Reads and writes camelCase keys; snake_case field names are accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResponseModel(BaseModel):
    """Reads ORM attributes by name and serializes them as camelCase."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class SuccessResponse(BaseModel):
    success: bool = True
