"""Helpers for reading API Gateway proxy events.

Both the REST API (v1) and HTTP API (v2) payload shapes are accepted.
"""
import base64
import binascii
import json
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from .errors import QueryParseError
from .schemas import GraphQLParams


def http_method(event: Mapping[str, Any]) -> str:
    method = event.get("httpMethod")
    if not method:
        request_context = event.get("requestContext") or {}
        method = (request_context.get("http") or {}).get("method")
    return str(method or "").upper()


def header(event: Mapping[str, Any], name: str) -> Optional[str]:
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if str(key).lower() == wanted:
            return value
    return None


def request_origin(event: Mapping[str, Any]) -> Optional[str]:
    return header(event, "origin")


def extract_query_input(event: Mapping[str, Any]) -> Union[str, Mapping[str, Any], None]:
    """Return the raw GraphQL request for the event's verb.

    POST reads the body, anything else reads the query string parameters.
    Returns ``None`` when there is nothing usable.
    """
    if http_method(event) == "POST":
        body = event.get("body")
        if isinstance(body, str) and event.get("isBase64Encoded"):
            try:
                body = base64.b64decode(body).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError):
                raise QueryParseError()
        return body if isinstance(body, str) else None

    params = event.get("queryStringParameters")
    if isinstance(params, (str, dict)):
        return params
    return None


def parse_query_input(raw: Union[str, Mapping[str, Any]]) -> GraphQLParams:
    if isinstance(raw, str):
        try:
            payload = json.loads(raw)
        except ValueError:
            raise QueryParseError()
    else:
        payload = dict(raw)

    if not isinstance(payload, dict):
        raise QueryParseError(got=payload)
    try:
        return GraphQLParams.model_validate(payload)
    except ValidationError:
        raise QueryParseError(got=payload)
