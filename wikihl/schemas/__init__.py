from wikihl.schemas.schemas import (
    OKResponse,
    TokenOut,
    HighlightRequest, HighlightResponse,
    TokenizeResponse, LineTokenizeRequest, LineTokenizeResponse,
    SessionCreated, SessionUpdate, SessionUpdateResponse,
)

__all__ = [
    "OKResponse",
    "TokenOut",
    "HighlightRequest", "HighlightResponse",
    "TokenizeResponse", "LineTokenizeRequest", "LineTokenizeResponse",
    "SessionCreated", "SessionUpdate", "SessionUpdateResponse",
]
