from __future__ import annotations

import mimetypes
from typing import IO, cast

import filetype

mimetypes.init()

mimetypes.add_type("image/svg+xml", ".svg")

IMAGE_JPEG = "image/jpeg"
IMAGE_PNG = "image/png"
IMAGE_SVG = "image/svg+xml"

OCTET_STREAM = "application/octet-stream"

_STRICT_MEDIATYPES = {
    tp.MIME
    for tp in filetype.TYPES
}


def guess(content: IO[bytes], *, name: str | None = None) -> str:
    """
    Guesses media type from the content signature, falling back to the file name.

    The name is trusted only for types without a signature, like SVG. A text file
    named 'logo.png' is reported as 'application/octet-stream', not as PNG.
    Content position is reset to the start.
    """
    content.seek(0)
    mime = filetype.guess_mime(content)
    content.seek(0)
    if mime:
        return cast(str, mime)

    if name is not None:
        mime = guess_unsafe(name)
        if mime not in _STRICT_MEDIATYPES:
            return mime

    return OCTET_STREAM


def guess_unsafe(name: str) -> str:
    """Guesses media type by a file name extension only."""
    mime, _ = mimetypes.guess_type(name, strict=False)
    if mime is None:
        return OCTET_STREAM
    return mime
