"""Lambda entry point that runs one GraphQL operation per invocation.

The handler reads the GraphQL request from an API Gateway proxy event, builds
an optional context value, executes the operation with graphql-core and wraps
the result in a proxy response carrying CORS headers.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from graphql import ExecutionResult, GraphQLError, GraphQLSchema, graphql

from .config import ALLOW_METHODS, Settings, load_settings
from .errors import CreateContextError, QueryParseError
from .events import extract_query_input, http_method, parse_query_input, request_origin
from .log import configure_logging
from .schemas import ProxyResponse
from .utils import compact_json, maybe_await

logger = logging.getLogger(__name__)

CreateContext = Callable[[Mapping[str, Any], Any], Union[Any, Awaitable[Any]]]
OnError = Callable[[Exception], Union[None, Awaitable[None]]]
Callback = Callable[[Optional[Exception], Dict[str, Any]], Any]

INTERNAL_ERROR_BODY = {"error": "Internal server error"}


class GraphQLLambdaHandler:
    def __init__(
        self,
        schema: GraphQLSchema,
        create_context: Optional[CreateContext] = None,
        on_error: Optional[OnError] = None,
        settings: Optional[Settings] = None,
    ):
        self.schema = schema
        self.create_context = create_context
        self.on_error = on_error
        self.settings = settings or load_settings()

    def __call__(
        self,
        event: Mapping[str, Any],
        context: Any = None,
        callback: Optional[Callback] = None,
    ) -> Dict[str, Any]:
        response = asyncio.run(self.handle(event, context))
        if callback is not None:
            callback(None, response)
        return response

    async def handle(self, event: Mapping[str, Any], context: Any = None) -> Dict[str, Any]:
        """Run the request and always produce exactly one response."""
        request_id = getattr(context, "aws_request_id", None)
        try:
            response = await self._handle(event or {}, context)
        except Exception as exc:
            logger.exception("Unhandled error while serving GraphQL request %s", request_id)
            await self._notify_error(exc)
            response = ProxyResponse(
                statusCode=500,
                headers={},
                body=compact_json(INTERNAL_ERROR_BODY),
            ).to_dict()
        logger.debug("GraphQL request %s finished with status %s", request_id, response["statusCode"])
        return response

    async def _handle(self, event: Mapping[str, Any], context: Any) -> Dict[str, Any]:
        headers = self._response_headers(event)

        if http_method(event) == "OPTIONS" and self.settings.handle_preflight:
            preflight_headers = dict(headers)
            preflight_headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
            preflight_headers["Access-Control-Allow-Headers"] = ",".join(self.settings.cors_allow_headers)
            return self._respond(204, preflight_headers, None)

        try:
            raw = extract_query_input(event)
            if raw is None:
                return self._respond(400, headers, compact_json({"error": "Empty GraphQL Query"}))
            params = parse_query_input(raw)
        except QueryParseError as exc:
            logger.info("Rejected GraphQL request with an unparseable payload")
            return self._respond(
                400,
                headers,
                compact_json({"error": "Unable to parse query", "got": exc.got}),
            )

        context_value = None
        if self.create_context is not None:
            try:
                context_value = await maybe_await(self.create_context(event, context))
            except CreateContextError as exc:
                context_value = exc
            if isinstance(context_value, CreateContextError):
                logger.info("create_context rejected the request with code %s", context_value.code)
                return self._respond(context_value.code or 500, headers, context_value.body)

        result = await self._execute(params.query, context_value, params.variables, params.operation_name)
        return self._respond(200, headers, compact_json(result.formatted))

    async def _execute(
        self,
        source: Optional[str],
        context_value: Any,
        variables: Optional[Dict[str, Any]],
        operation_name: Optional[str],
    ) -> ExecutionResult:
        if source is None:
            return ExecutionResult(data=None, errors=[GraphQLError("Must provide query string.")])
        return await graphql(
            self.schema,
            source,
            context_value=context_value,
            variable_values=variables,
            operation_name=operation_name,
        )

    async def _notify_error(self, exc: Exception) -> None:
        if self.on_error is None:
            return
        try:
            await maybe_await(self.on_error(exc))
        except Exception:
            logger.exception("on_error hook failed")

    def _response_headers(self, event: Mapping[str, Any]) -> Dict[str, str]:
        headers = dict(self.settings.extra_headers)
        if self.settings.cors_allow_credentials:
            headers["Access-Control-Allow-Credentials"] = "true"
        headers["Access-Control-Allow-Origin"] = request_origin(event) or self.settings.cors_allow_origin
        headers["Content-Type"] = "application/json"
        return headers

    @staticmethod
    def _respond(status_code: int, headers: Dict[str, str], body: Optional[str]) -> Dict[str, Any]:
        return ProxyResponse(statusCode=status_code, headers=headers, body=body).to_dict()


def create_handler(
    schema: GraphQLSchema,
    create_context: Optional[CreateContext] = None,
    on_error: Optional[OnError] = None,
    settings: Optional[Settings] = None,
) -> GraphQLLambdaHandler:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    return GraphQLLambdaHandler(
        schema,
        create_context=create_context,
        on_error=on_error,
        settings=settings,
    )
