"""
Payload validation with explicit results.

Endpoints receive raw JSON bodies and run them through ``validate``
with the schema for the operation.  The function never raises: it
returns either ``ValidResult`` holding the parsed model or
``InvalidResult`` holding a list of issues.  This lets each route
choose its own status code for bad input.

``json_payload`` is the FastAPI dependency that reads the body.  A body
that is not valid JSON comes back as ``None``, so it fails ``validate``
like any other non‑object payload.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Type, TypeVar, Union

from fastapi import Request
from pydantic import BaseModel, ValidationError


ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ValidResult(Generic[ModelT]):
    data: ModelT
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class InvalidResult:
    issues: List[Dict[str, str]]
    ok: bool = field(default=False, init=False)


ValidationOutcome = Union[ValidResult[ModelT], InvalidResult]


def validate(payload: Any, schema: Type[ModelT]) -> "ValidationOutcome[ModelT]":
    """Check ``payload`` against ``schema``.

    Only JSON objects are accepted; a missing body, a list or a scalar
    produces a single issue against the whole payload.
    """
    if not isinstance(payload, dict):
        return InvalidResult(issues=[{"field": "", "message": "Expected a JSON object"}])
    try:
        return ValidResult(data=schema.model_validate(payload))
    except ValidationError as e:
        return InvalidResult(
            issues=[
                {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ]
        )


async def json_payload(request: Request) -> Any:
    """Return the decoded JSON body, or ``None`` when it does not parse."""
    try:
        return await request.json()
    except (ValueError, RecursionError):
        return None
