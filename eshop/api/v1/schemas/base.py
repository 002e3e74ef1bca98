from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimals stay exact in Python, JSON clients get plain numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Wire models: camelCase on the wire, snake_case accepted too."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
