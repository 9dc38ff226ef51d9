"""Immutable codec bindings.

Binds SQL type tags and shape kinds to codecs. A registry is built once at
startup and handed to whatever declares columns; it cannot be changed after
construction.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType

from geography_types.codecs.ewkb import ALL_CODECS
from geography_types.codecs.protocols import GeographyCodec
from geography_types.config import CONSTANTS
from geography_types.models.geometry import Geography, GeometryKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CodecBinding:
    """A single {type tag, shape kind} -> codec binding.

    Attributes:
        kind: Shape kind the codec handles
        codec: Codec implementation
        type_tag: SQL type tag the binding registers against
    """

    kind: GeometryKind
    codec: GeographyCodec
    type_tag: str = CONSTANTS.SQL_TYPE_TAG


class CodecRegistry:
    """Read-only lookup of codecs by shape kind.

    Attributes:
        bindings: Mapping of shape kind to binding (read-only view)
    """

    def __init__(self, bindings: Iterable[CodecBinding]):
        """Initialize registry from bindings.

        Args:
            bindings: One binding per shape kind

        Raises:
            ValueError: If a kind is bound twice, or a codec is bound to a kind
                it does not handle
        """
        by_kind: dict[GeometryKind, CodecBinding] = {}
        for binding in bindings:
            if binding.kind in by_kind:
                msg = f"Duplicate codec binding for {binding.kind}"
                raise ValueError(msg)
            if binding.codec.kind != binding.kind:
                msg = f"Codec for {binding.codec.kind} cannot be bound to {binding.kind}"
                raise ValueError(msg)
            by_kind[binding.kind] = binding

        self.bindings = MappingProxyType(by_kind)
        logger.debug(f"Codec registry built with kinds: {[str(k) for k in by_kind]}")

    def __contains__(self, kind: object) -> bool:
        return kind in self.bindings

    def __iter__(self) -> Iterator[CodecBinding]:
        return iter(self.bindings.values())

    def __len__(self) -> int:
        return len(self.bindings)

    def codec_for(self, kind: GeometryKind | str) -> GeographyCodec:
        """Look up the codec for a shape kind.

        Raises:
            KeyError: If no codec is bound to the kind
        """
        try:
            binding = self.bindings.get(GeometryKind(kind))
        except ValueError:
            binding = None

        if binding is None:
            msg = f"No codec bound for geometry kind {kind!r}"
            raise KeyError(msg)
        return binding.codec

    def codec_for_value(self, value: Geography) -> GeographyCodec:
        """Look up the codec for a value by its model kind."""
        return self.codec_for(value.kind)

    def type_tag(self, kind: GeometryKind | str) -> str:
        """SQL type tag registered for a shape kind."""
        self.codec_for(kind)
        return self.bindings[GeometryKind(kind)].type_tag

    def decode(self, kind: GeometryKind | str, data: bytes | None) -> Geography:
        """Decode wire bytes with the codec bound to ``kind``."""
        return self.codec_for(kind).decode(data)

    def encode(self, value: Geography) -> bytes:
        """Encode a value with the codec bound to its kind."""
        return self.codec_for_value(value).encode(value)


DEFAULT_REGISTRY = CodecRegistry(CodecBinding(codec.kind, codec) for codec in ALL_CODECS)
