"""Response envelope shared by every endpoint."""

from pydantic import BaseModel


class Envelope(BaseModel):
    """Every response carries a textual status and the HTTP code."""

    status: str = "OK"
    code: int = 200


class MessageResponse(Envelope):
    """Envelope with a human-readable message only."""

    message: str
