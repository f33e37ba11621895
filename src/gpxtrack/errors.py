"""Errors raised while decoding GPX documents.

A malformed or structurally invalid document always surfaces as one of
these exceptions. A valid document with no tracks or waypoints is not an
error.
"""

from __future__ import annotations


class GpxParseError(ValueError):
    """Base class for GPX decoding failures.

    Attributes:
        message: Human-readable description of the failure.
        location: Element path of the offending node
            (e.g. ``gpx/trk[1]/trkseg[1]/trkpt[3]``), or None.
    """

    def __init__(self, message: str, location: str | None = None) -> None:
        self.message = message
        self.location = location
        if location:
            super().__init__(f"{message} (at {location})")
        else:
            super().__init__(message)


class MalformedXmlError(GpxParseError):
    """The input is not well-formed XML."""

    def __init__(self, message: str, position: tuple[int, int] | None = None) -> None:
        self.position = position
        location = f"line {position[0]}, column {position[1]}" if position else None
        super().__init__(message, location)


class StructuralError(GpxParseError):
    """Well-formed XML that is missing or has an invalid mandatory value."""
