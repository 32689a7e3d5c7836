from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# prices travel as JSON numbers, not strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


def success(data: Any = None, results: Optional[int] = None, message: Optional[str] = None) -> dict:
    body = {"status": "success"}
    if results is not None:
        body["results"] = results
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def dump(model: BaseModel) -> dict:
    return model.model_dump(by_alias=True, mode="json")
