from pydantic import BaseModel


class ErrorInfo(BaseModel):
    code: str
    message: str
    retryable: bool = False
    suggested_fix: str | None = None  # Human-readable fix suggestion


class ErrorResponse(BaseModel):
    """JSON body returned by the API for handled errors."""

    error: str
    code: str | None = None
    retryable: bool | None = None
