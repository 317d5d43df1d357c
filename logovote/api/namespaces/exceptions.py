from __future__ import annotations

from logovote.api.exceptions import APIError


class FriendlyNameTaken(APIError):
    status_code = 409
    code = "FRIENDLY_NAME_TAKEN"
    code_verbose = "Friendly name is taken"
    default_message = "Another namespace already uses this name"


class NamespaceDeleteFailed(APIError):
    status_code = 500
    code = "NAMESPACE_DELETE_FAILED"
    code_verbose = "Namespace delete failed"
    default_message = "Namespace could not be deleted completely"
