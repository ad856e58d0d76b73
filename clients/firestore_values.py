"""Conversion between plain Python values and Firestore REST typed values.

Firestore's REST API wraps every field in a single-key object naming its
type, e.g. ``{"stringValue": "Remote"}`` or
``{"arrayValue": {"values": [...]}}``.
"""
from datetime import datetime, timezone


def encode_value(value: object) -> dict:
    if value is None:
        return {"nullValue": None}
    # bool before int, bool is an int subclass
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return {"timestampValue": value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(item) for item in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    raise TypeError(f"Unsupported Firestore value type: {type(value).__name__}")


def encode_fields(record: dict) -> dict:
    return {key: encode_value(value) for key, value in record.items()}


def decode_value(value: dict) -> object:
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return value["booleanValue"]
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "stringValue" in value:
        return value["stringValue"]
    if "timestampValue" in value:
        return value["timestampValue"]
    if "referenceValue" in value:
        return value["referenceValue"]
    if "arrayValue" in value:
        return [decode_value(item) for item in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    raise ValueError(f"Unsupported Firestore value: {value!r}")


def decode_fields(fields: dict | None) -> dict:
    return {key: decode_value(value) for key, value in (fields or {}).items()}
