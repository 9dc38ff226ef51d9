"""Codec error definitions.

Every failure at the storage boundary surfaces as one of these. Nothing is
recovered or retried here: the error propagates to whatever materialises the
row, and a single bad column fails the whole row.
"""

from geography_types.models.geometry import GeometryKind


class GeographyCodecError(Exception):
    """Base class for geography codec failures.

    Attributes:
        kind: Shape kind being decoded or encoded when the failure happened
    """

    def __init__(self, message: str, kind: GeometryKind | None = None):
        super().__init__(message)
        self.kind = kind


class DecodeError(GeographyCodecError):
    """Wire bytes were absent (SQL NULL) or could not be read as the expected shape."""


class EncodeError(GeographyCodecError):
    """A value could not be written to the wire or to the output sink."""
