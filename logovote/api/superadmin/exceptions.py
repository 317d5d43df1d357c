from __future__ import annotations

from logovote.api.exceptions import APIError


class InvalidArchive(APIError):
    status_code = 400
    code = "INVALID_ARCHIVE"
    code_verbose = "Invalid archive"
    default_message = "Uploaded file is not a ZIP archive"
