"""Helpers for reading request bodies and writing JSON replies."""

import json

from werkzeug.wrappers import Response

from authdemo import response as resp


def decode_json(body):
    """Decode the first JSON value in *body*; raises ValueError if there is none."""
    data = body.read() if hasattr(body, "read") else body
    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8")
    return json.JSONDecoder().raw_decode(data.lstrip())[0]


def bad_request_json():
    """A 400 reply saying the request could not be decoded."""
    payload = json.dumps(resp.error("failed to decode request").to_dict()) + "\n"
    return Response(payload, status=400, content_type="application/json")


def request_body(request):
    """Read the whole body of *request*, leaving it readable again."""
    return request.get_data(cache=True)