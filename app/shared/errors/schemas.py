"""
Error response schema shared by every error path of the API.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ErrorResponse(BaseModel):
    """JSON body returned for every failed request.

    Serialized with camelCase keys: statusCode, timestamp, path,
    method, message, error. Built once per failed request and never
    modified afterwards.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    status_code: int
    timestamp: str
    path: str
    method: str
    message: str
    error: str
