from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"  # no database client at startup
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE = "store"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE: 500,
}


@dataclass(frozen=True)
class Ok:
    payload: Any


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str


Result = Union[Ok, Err]


def status_for(result: Result) -> int:
    if isinstance(result, Ok):
        return 200
    return STATUS_BY_KIND[result.kind]


def to_response(result: Result) -> JSONResponse:
    """Error bodies are {"erro": message}; successes return the payload with store types made JSON-safe."""
    if isinstance(result, Ok):
        # Firestore timestamps, bytes and the like are not plain JSON.
        return JSONResponse(jsonable_encoder(result.payload), status_code=200)
    return JSONResponse({"erro": result.message}, status_code=status_for(result))
