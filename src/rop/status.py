"""
Status codes: the closed catalog of outcome classifications.

Each code pairs a numeric identifier with a display name. The identifiers
follow HTTP semantics so the transport adapter can switch on them directly,
but nothing here depends on HTTP.

    >>> StatusCode.NOT_FOUND.id
    404
    >>> StatusCode.from_id(409) is StatusCode.CONFLICT
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class StatusCode:
    """
    Immutable (id, name) pair.

    Only the catalog members below are meant to exist; compare with `==` or `is`.
    """

    id: int
    name: str

    OK: ClassVar[StatusCode]
    BAD_REQUEST: ClassVar[StatusCode]
    UNAUTHORIZED: ClassVar[StatusCode]
    FORBIDDEN: ClassVar[StatusCode]
    NOT_FOUND: ClassVar[StatusCode]
    CONFLICT: ClassVar[StatusCode]
    PRECONDITION_REQUIRED: ClassVar[StatusCode]
    INTERNAL_SERVER_ERROR: ClassVar[StatusCode]
    NOT_IMPLEMENTED: ClassVar[StatusCode]

    @staticmethod
    def catalog() -> tuple[StatusCode, ...]:
        """Every status code in the catalog, ordered by id."""
        return tuple(sorted(_BY_ID.values(), key=lambda code: code.id))

    @staticmethod
    def from_id(status_id: int) -> StatusCode:
        """Look up a catalog member by numeric id. Raises ValueError if unknown."""
        try:
            return _BY_ID[status_id]
        except KeyError:
            raise ValueError(f"Unknown status code id: {status_id}") from None

    def __str__(self) -> str:
        return f"{self.id} {self.name}"


StatusCode.OK = StatusCode(200, "OK")
StatusCode.BAD_REQUEST = StatusCode(400, "Bad Request")
StatusCode.UNAUTHORIZED = StatusCode(401, "Unauthorized")
StatusCode.FORBIDDEN = StatusCode(403, "Forbidden")
StatusCode.NOT_FOUND = StatusCode(404, "Not Found")
StatusCode.CONFLICT = StatusCode(409, "Conflict")
StatusCode.PRECONDITION_REQUIRED = StatusCode(428, "Precondition Required")
StatusCode.INTERNAL_SERVER_ERROR = StatusCode(500, "Internal Server Error")
StatusCode.NOT_IMPLEMENTED = StatusCode(501, "Not Implemented")

_BY_ID: dict[int, StatusCode] = {
    code.id: code
    for code in (
        StatusCode.OK,
        StatusCode.BAD_REQUEST,
        StatusCode.UNAUTHORIZED,
        StatusCode.FORBIDDEN,
        StatusCode.NOT_FOUND,
        StatusCode.CONFLICT,
        StatusCode.PRECONDITION_REQUIRED,
        StatusCode.INTERNAL_SERVER_ERROR,
        StatusCode.NOT_IMPLEMENTED,
    )
}
