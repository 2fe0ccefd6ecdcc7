"""ResponseExtractor — pulls the JSON payload out of a free-form model reply."""
import json

from photocritic.errors import MalformedPayload, NoPayloadFound


def find_payload(reply: str) -> str:
    """Return the span from the first '{' through the last '}'.

    Tolerates prose before and after the payload. Stray braces in that prose
    widen the span and make the parse fail.
    """
    start = reply.find("{")
    end = reply.rfind("}")
    if start == -1 or end <= start:
        raise NoPayloadFound("no JSON object found in model reply")
    return reply[start:end + 1]


def extract_payload(reply: str) -> dict:
    payload = find_payload(reply)
    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise MalformedPayload("model reply JSON did not parse", payload) from exc
    if not isinstance(parsed, dict):
        raise MalformedPayload("model reply JSON is not an object", payload)
    return parsed
