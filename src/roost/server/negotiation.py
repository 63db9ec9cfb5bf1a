"""Turn whatever a handler returned into a ``Response``.

Bound handlers commonly return the model they were given, so dataclass
instances serialize to JSON the same way dicts and lists do.
"""

import dataclasses
import json
from typing import Any

from roost.http.response import Redirect, Response


def _encode_extra(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def _is_instance_dataclass(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def negotiate(value: Any) -> Response:
    """Build a response from a handler's return value.

    ============================  ==========================================
    returned                      response
    ============================  ==========================================
    ``Response``                  as is
    ``Redirect``                  its status, ``Location`` set
    ``str``                       200 text/html
    ``bytes``                     200 application/octet-stream
    dict, list, dataclass         200 application/json
    ``(value, status)``           *value* negotiated, status replaced
    ``(value, status, headers)``  same, with *headers* appended
    ``None``                      204, no body
    ============================  ==========================================
    """
    if isinstance(value, Response):
        return value
    if isinstance(value, Redirect):
        return Response(status=value.status, headers=(("Location", value.url), *value.headers))
    if value is None:
        return Response(status=204)
    if isinstance(value, str):
        return Response(body=value)
    if isinstance(value, bytes):
        return Response(body=value, content_type="application/octet-stream")
    if isinstance(value, dict | list) or _is_instance_dataclass(value):
        body = json.dumps(value, default=_encode_extra)
        return Response(body=body, content_type="application/json")
    match value:
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
    msg = (
        f"Cannot turn a {type(value).__name__} into a response; "
        "return str, bytes, dict, list, a dataclass, a Response or a Redirect."
    )
    raise TypeError(msg)
