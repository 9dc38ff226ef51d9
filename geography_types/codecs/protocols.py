"""Codec protocol definitions."""

from typing import BinaryIO, Protocol, TypeVar

from geography_types.models.geometry import GeometryKind

T = TypeVar("T")


class GeographyCodec(Protocol[T]):
    """Protocol for converting one shape kind to and from wire bytes.

    Implemented once per shape kind. Implementations hold no mutable state, so
    one instance can be shared by every column and thread in the process.
    """

    kind: GeometryKind
    model: type[T]

    def decode(self, data: bytes | None) -> T:
        """Read a value from wire bytes.

        Args:
            data: Wire bytes, or None for SQL NULL

        Returns:
            Decoded value

        Raises:
            DecodeError: If data is None or cannot be read as this kind
        """
        ...

    def decode_optional(self, data: bytes | None) -> T | None:
        """Read a value, mapping SQL NULL to None instead of failing."""
        ...

    def encode(self, value: T) -> bytes:
        """Write a value as wire bytes.

        Raises:
            EncodeError: If the value is of another kind
        """
        ...

    def encode_to(self, value: T, sink: BinaryIO) -> None:
        """Write a value's wire bytes to an output sink.

        Raises:
            EncodeError: If the value is of another kind or the sink raises OSError
        """
        ...
