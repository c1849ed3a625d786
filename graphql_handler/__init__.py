from .config import Settings, load_settings
from .errors import CreateContextError
from .handler import GraphQLLambdaHandler, create_handler

__all__ = [
    "CreateContextError",
    "GraphQLLambdaHandler",
    "Settings",
    "create_handler",
    "load_settings",
]

__version__ = "0.1.0"
