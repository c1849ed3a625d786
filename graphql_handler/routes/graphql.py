import base64
import types
import uuid
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import Response

router = APIRouter()


async def to_proxy_event(request: Request) -> Dict[str, Any]:
    """Build an API Gateway (REST, v1) proxy event from an incoming request.

    The body is forwarded base64-encoded, the way API Gateway delivers
    binary payloads, so undecodable bytes reach the handler untouched.
    """
    body = await request.body()
    params = dict(request.query_params)
    return {
        "httpMethod": request.method,
        "path": request.url.path,
        "headers": dict(request.headers),
        "queryStringParameters": params or None,
        "body": base64.b64encode(body).decode("ascii") if body else None,
        "isBase64Encoded": bool(body),
        "requestContext": {"requestId": str(uuid.uuid4())},
    }


@router.api_route("/graphql", methods=["GET", "POST", "OPTIONS"])
async def graphql_endpoint(request: Request):
    event = await to_proxy_event(request)
    context = types.SimpleNamespace(
        aws_request_id=event["requestContext"]["requestId"],
        function_name="local",
        function_version="$LATEST",
    )
    result = await request.app.state.graphql_handler.handle(event, context)
    body = result.get("body")
    return Response(
        content=body.encode("utf-8") if body else b"",
        status_code=result["statusCode"],
        headers=result.get("headers") or {},
    )
