"""Framework-independent HTTP request and response types and error mapping."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, TypeVar

from .dto import from_json
from .xerrors import BusinessError, NotFoundError, ValidationError

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _to_int(text: Optional[str]) -> int:
    """Parse a decimal integer strictly; anything unparsable gives 0."""
    if text is None or not _INT_RE.fullmatch(text):
        return 0
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return 0
    return value


@dataclass
class Request:
    """An incoming HTTP request, detached from any web framework."""

    host: str = ""
    path: str = ""
    method: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)

    def parse_query(self, name: str) -> str:
        return self.query.get(name, "")

    def parse_query_int(self, name: str) -> int:
        return _to_int(self.query.get(name))

    def parse_param_string(self, name: str) -> str:
        return self.params.get(name, "")

    def parse_param_int(self, name: str) -> int:
        return _to_int(self.params.get(name))

    def parse_header(self, name: str) -> str:
        return self.headers.get(name, "")

    def parse_header_int(self, name: str) -> int:
        return _to_int(self.headers.get(name))

    def parse_body(self, cls: type[T]) -> T:
        """Decode the JSON body into an instance of ``cls``; raises DecodeError."""
        return from_json(cls, self.body)


class RequestBuilder:
    """Fluent construction of a Request."""

    def __init__(self) -> None:
        self._request = Request()

    def host(self, value: str) -> RequestBuilder:
        self._request.host = value
        return self

    def path(self, value: str) -> RequestBuilder:
        self._request.path = value
        return self

    def method(self, value: str) -> RequestBuilder:
        self._request.method = value
        return self

    def headers(self, value: dict[str, str]) -> RequestBuilder:
        self._request.headers = value
        return self

    def params(self, value: dict[str, str]) -> RequestBuilder:
        self._request.params = value
        return self

    def query(self, value: dict[str, str]) -> RequestBuilder:
        self._request.query = value
        return self

    def body(self, value: bytes) -> RequestBuilder:
        self._request.body = value
        return self

    def build(self) -> Request:
        return self._request


@dataclass
class Response:
    """An HTTP response: status code, body and optional headers."""

    code: int
    body: Any = None
    headers: Optional[dict[str, str]] = None


class Controller(Protocol):
    """Anything that turns a Request into a Response."""

    def handle(self, request: Request) -> Response: ...


def ok(body: Any) -> Response:
    return Response(200, body)


def created(body: Any) -> Response:
    return Response(201, body)


def accepted(body: Any) -> Response:
    return Response(202, body)


def no_content() -> Response:
    return Response(204)


def bad_request(body: Any) -> Response:
    return Response(400, body)


def not_found(body: Any) -> Response:
    return Response(404, body)


def conflict(body: Any) -> Response:
    return Response(409, body)


def unprocessable_entity(body: Any) -> Response:
    return Response(422, body)


def internal_server_error(body: Any) -> Response:
    return Response(500, body)


def service_unavailable(body: Any) -> Response:
    return Response(503, body)


@dataclass
class DetailResponse:
    """One invalid attribute and the messages explaining why."""

    attribute: str
    messages: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"attribute": self.attribute, "messages": list(self.messages)}


@dataclass
class ErrorInfo:
    """Description, code and details of an error response."""

    description: str
    code: str = ""
    details: list[DetailResponse] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"description": self.description}
        if self.code:
            result["code"] = self.code
        if self.details:
            result["details"] = [detail.to_dict() for detail in self.details]
        return result


@dataclass
class ErrorMessage:
    """The JSON body of an error response."""

    error: ErrorInfo

    def to_dict(self) -> dict[str, Any]:
        """JSON form, leaving out an empty code and empty details."""
        return {"error": self.error.to_dict()}


def new_error_message(code: str, desc: str, *args: DetailResponse) -> ErrorMessage:
    return ErrorMessage(ErrorInfo(description=desc, code=code, details=list(args)))


def handle_error(err: BaseException) -> Response:
    """Map an exception to the matching error response."""
    if isinstance(err, ValidationError):
        details = [DetailResponse(f.name, list(f.reasons)) for f in err.fields]
        return bad_request(new_error_message("400", "Bad Request", *details))
    if isinstance(err, BusinessError):
        return unprocessable_entity(new_error_message(err.code, err.description))
    if isinstance(err, NotFoundError):
        return not_found(new_error_message("404", err.description))
    return internal_server_error(new_error_message("500", "Internal Server Error"))