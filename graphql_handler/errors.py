from typing import Any, Optional


class CreateContextError(Exception):
    """Returned or raised by a ``create_context`` hook to short-circuit the request.

    ``code`` becomes the response status (500 when falsy) and ``body`` is sent
    back verbatim, so it should already be serialized.
    """

    def __init__(self, code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(body or "CreateContextError")
        self.code = code
        self.body = body


class QueryParseError(ValueError):
    def __init__(self, got: Any = None):
        super().__init__("Unable to parse query")
        self.got = got
