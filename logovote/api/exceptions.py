from __future__ import annotations

from typing import TYPE_CHECKING, TypedDict, cast

from fastapi.responses import JSONResponse

if TYPE_CHECKING:
    from fastapi import Request, Response


async def api_error_exception_handler(_: Request, exc: Exception) -> Response:
    exc = cast(APIError, exc)
    return JSONResponse(exc.as_dict(), status_code=exc.status_code)


class APIErrorDict(TypedDict):
    code: str
    code_verbose: str
    message: str


class APIError(Exception):
    status_code = 500
    code = "SERVER_ERROR"
    code_verbose = "A server error occurred"
    default_message = "Something has gone wrong on the server"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message

    def __repr__(self):
        return f"{self.__class__.__name__}(message={self.message!r})"

    def as_dict(self) -> APIErrorDict:
        return {
            "code": self.code,
            "code_verbose": self.code_verbose,
            "message": self.message,
        }


class MissingAdminKey(APIError):
    status_code = 401
    code = "MISSING_ADMIN_KEY"
    code_verbose = "Missing admin key"
    default_message = "No admin key found in the request headers"


class InvalidAdminKey(APIError):
    status_code = 403
    code = "INVALID_ADMIN_KEY"
    code_verbose = "Invalid admin key"
    default_message = "Admin key doesn't match the namespace"


class MissingToken(APIError):
    status_code = 401
    code = "MISSING_TOKEN"
    code_verbose = "Missing superadmin token"
    default_message = "Superadmin endpoints require a bearer token"


class InvalidToken(APIError):
    status_code = 403
    code = "INVALID_TOKEN"
    code_verbose = "Invalid superadmin token"
    default_message = "Token is wrong or superadmin access is disabled"


class NamespaceNotFound(APIError):
    status_code = 404
    code = "NAMESPACE_NOT_FOUND"
    code_verbose = "Namespace not found"
    default_message = "Namespace does not exist"
