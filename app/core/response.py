# app/core/response.py

import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        request_id = generate_request_id()
        request.state.request_id = request_id
    return request_id


def build_envelope(
    status_code: int,
    message: str,
    data: Any = None,
    errors: Optional[List[Any]] = None,
    request_id: Optional[str] = None,
) -> dict:
    """Uniform response body shared by every endpoint"""
    body = {
        "status": "success" if status_code < 400 else "error",
        "statusCode": status_code,
        "message": message,
    }
    if data is not None:
        body["data"] = jsonable_encoder(data, by_alias=True)
    if errors is not None:
        body["errors"] = jsonable_encoder(errors)
    body["requestId"] = request_id or generate_request_id()
    body["timestamp"] = datetime.now(timezone.utc).isoformat()
    return body


def send_response(
    request: Request,
    status_code: int,
    message: str,
    data: Any = None,
    errors: Optional[List[Any]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_envelope(status_code, message, data, errors, get_request_id(request)),
    )
