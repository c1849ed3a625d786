from graphql_handler import create_handler
from main import create_context, schema

# AWS Lambda entrypoint for API Gateway proxy integrations (REST or HTTP API).
handler = create_handler(schema=schema, create_context=create_context)
