"""Demo schema served over HTTP for local development.

Run with ``uvicorn main:app --reload`` and POST ``{"query": "{ hello }"}``
to ``/api/graphql``.
"""
from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
)

from graphql_handler.app import create_app
from graphql_handler.events import header


def _resolve_hello(_root, info, name=None):
    viewer = info.context.get("viewer") if isinstance(info.context, dict) else None
    return f"hello {name or viewer or 'world'}"


schema = GraphQLSchema(
    query=GraphQLObjectType(
        "RootQuery",
        {
            "hello": GraphQLField(
                GraphQLNonNull(GraphQLString),
                args={"name": GraphQLArgument(GraphQLString)},
                resolve=_resolve_hello,
            ),
        },
    )
)


def create_context(event, context):
    viewer = header(event, "x-viewer")
    return {"viewer": viewer, "request_id": getattr(context, "aws_request_id", None)}


app = create_app(schema, create_context=create_context)
