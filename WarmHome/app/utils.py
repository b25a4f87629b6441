from datetime import datetime
from bson import ObjectId


def to_json_safe(value):
    """Convert Mongo documents (ObjectId, datetime) into values jsonify accepts."""
    if isinstance(value, dict):
        return {key: to_json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(item) for item in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def parse_number(raw, default=None):
    """Query string number: '' or None gives the default, '12.0' gives 12."""
    if raw is None or str(raw).strip() == '':
        return default
    number = float(raw)
    return int(number) if number.is_integer() else number
