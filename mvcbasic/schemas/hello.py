"""
mvcbasic — Pydantic Schemas
=============================

What:  Records bound from requests and written into responses.
Why:   pydantic gives type conformance (``age`` must be an integer) and JSON
       field mapping by name, which is exactly the binding contract.
How:   HelloData is bound from query/form parameters, from JSON bodies, and
       serialized back as JSON. Unknown JSON fields are ignored.
"""

from typing import Optional

from pydantic import BaseModel, Field


class HelloData(BaseModel):
    """
    What:  The example record used throughout the controllers.
    Fields default like their counterparts in a freshly created bean:
           ``username`` unset, ``age`` zero.
    """

    username: Optional[str] = Field(default=None, description="User name (free text)")
    age: int = Field(default=0, description="Age; non-numeric text fails binding")

    model_config = {"extra": "ignore"}


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all errors.

    Example:
        {
            "error": "missing_parameter",
            "message": "Required request parameter 'username' is not present",
            "details": {"parameter": "username"},
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
