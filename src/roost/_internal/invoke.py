"""Call user code that may be ``def`` or ``async def``.

Route handlers, error handlers, lifespan hooks and the model lookup
overrides all go through ``invoke``.
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    result = func(*args, **kwargs)
    return await result if inspect.isawaitable(result) else result
