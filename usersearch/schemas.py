from enum import IntEnum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class OrderBy(IntEnum):
    AS_IS = 0
    ASC = -1
    DESC = 1


ORDER_FIELDS = ("Id", "Age", "Name")
DEFAULT_ORDER_FIELD = "Name"


class SearchRequest(BaseModel):
    """Caller-side search parameters.

    Ranges are not checked here: a negative limit or offset is a legal
    request and is rejected by ``SearchClient.find_users``.
    """

    limit: int = 0
    offset: int = 0
    query: str = ""
    order_field: str = ""
    order_by: OrderBy = OrderBy.AS_IS

    model_config = ConfigDict(frozen=True)


class User(BaseModel):
    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    age: int = Field(alias="Age")
    about: str = Field(alias="About")
    gender: str = Field(alias="Gender")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SearchResponse(BaseModel):
    users: List[User]
    next_page: bool = False


class ErrorResponse(BaseModel):
    error: str
