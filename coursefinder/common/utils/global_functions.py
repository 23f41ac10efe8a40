# common/utils/global_functions.py
from typing import Any, Dict, Optional

from coursefinder.common.schemas import ApiResponse

def resPayloadData(
    success: bool,
    message: Optional[str] = None,
    data: Any = None,
    error: Optional[str] = None,
) -> ApiResponse:
    """
    Constructs a standardized response envelope.

    Args:
        success (bool): Whether the operation succeeded.
        message (str, optional): A human readable message associated with the response.
        data (Any, optional): The response data. Ignored when success is False.
        error (str, optional): A short machine readable error kind. Required when success is False.

    Returns:
        ApiResponse: The envelope, validated so a failure never carries data.
    """
    if not success:
        return ApiResponse(success=False, error=error, message=message)
    return ApiResponse(success=True, data=data, message=message)

def failure_body(error: str, message: str) -> Dict[str, Any]:
    """JSON-ready body for a failed envelope, used by exception handlers."""
    return resPayloadData(False, message=message, error=error).model_dump(exclude_none=True)
