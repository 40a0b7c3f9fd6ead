"""Schema Base: camelCase wire format over snake_case Python attributes."""

from typing import Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Flat scalar values allowed in client-supplied metadata bags
ScalarValue = Union[str, int, float, bool, None]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
