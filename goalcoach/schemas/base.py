from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, serializes camelCase.

    Infinity and NaN are rejected for every float field.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        allow_inf_nan = False
