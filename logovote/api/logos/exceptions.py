from __future__ import annotations

from logovote.api.exceptions import APIError


class AlreadyVoted(APIError):
    status_code = 409
    code = "ALREADY_VOTED"
    code_verbose = "Already voted"
    default_message = "This identifier has already voted for the logo"


class LogoNotFound(APIError):
    status_code = 404
    code = "LOGO_NOT_FOUND"
    code_verbose = "Logo not found"
    default_message = "Logo does not exist"


class TooManyFiles(APIError):
    status_code = 400
    code = "TOO_MANY_FILES"
    code_verbose = "Too many files"
    default_message = "Too many files in a single upload"
