"""Response state handed to the error normalizer."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict


class StructuredError(BaseModel):
    """A body that is already an error mapping (title/detail/source)."""

    model_config = ConfigDict(frozen=True)

    error: Dict[str, Any]


class PlainDetailList(BaseModel):
    """A body made of one or more detail strings."""

    model_config = ConfigDict(frozen=True)

    details: List[str]


class RawText(BaseModel):
    """A plain text body."""

    model_config = ConfigDict(frozen=True)

    text: str


class EmptyBody(BaseModel):
    """No body was produced."""

    model_config = ConfigDict(frozen=True)


ResponseBody = Union[StructuredError, PlainDetailList, RawText, EmptyBody]


def body_from(value: Any) -> ResponseBody:
    """Classify an arbitrary response body into one of the known shapes."""
    if value is None or value == "" or value == [] or value == {}:
        return EmptyBody()
    if isinstance(value, dict):
        return StructuredError(error=value)
    if isinstance(value, (list, tuple)):
        return PlainDetailList(details=[str(item) for item in value])
    return RawText(text=str(value))


class ResponseContext(BaseModel):
    """Status, body and captured exception of a failed response."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: Optional[int] = None
    body: ResponseBody = EmptyBody()
    error: Optional[BaseException] = None
