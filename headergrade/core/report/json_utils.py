# core/report/json_utils.py

import json
from datetime import datetime
from enum import Enum
from typing import Any


class CustomJSONEncoder(json.JSONEncoder):
    """
    JSON encoder for analysis results:
    - objects exposing to_dict() are serialised through it
    - enums become their value, datetimes ISO strings
    - sets and tuples become lists
    """

    def default(self, obj: Any) -> Any:
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, set):
            return list(obj)
        return super().default(obj)


def json_dumps(obj: Any, **kwargs) -> str:
    """
    Serialize object to JSON string, handling analysis result types.

    Args:
        obj: Object to serialize
        **kwargs: Additional keyword arguments for json.dumps

    Returns:
        JSON string representation
    """
    return json.dumps(obj, cls=CustomJSONEncoder, **kwargs)


def json_dump(obj: Any, fp, **kwargs) -> None:
    json.dump(obj, fp, cls=CustomJSONEncoder, **kwargs)
