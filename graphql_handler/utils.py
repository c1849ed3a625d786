import inspect
import json
from typing import Any


async def maybe_await(value: Any) -> Any:
    # Hooks may be plain functions or coroutine functions
    if inspect.isawaitable(value):
        return await value
    return value


def compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
