"""Inspect and build hex EWKB values for geography columns.

Useful when debugging what a geography column actually holds: paste the hex
PostGIS prints for a value and get the decoded value back, or build the hex for
a value before inserting it by hand.

Usage:
    geography-ewkb decode 0101000020E6100000000000000000F03F0000000000000040
    geography-ewkb decode 0101000020E6100000000000000000F03F0000000000000040 --wkt
    geography-ewkb encode '{"x": 1.0, "y": 2.0, "srid": 4326}' --kind point
    geography-ewkb encode 'LINESTRING (0 0, 1 1)' --wkt --srid 4326 --kind linestring
    geography-ewkb --help
"""

import logging
from typing import Annotated

import shapely
import typer
from pydantic import ValidationError
from shapely.errors import GEOSException

from geography_types.codecs.registry import DEFAULT_REGISTRY
from geography_types.errors import GeographyCodecError
from geography_types.models.geometry import MODELS, GeometryKind
from geography_types.spatial.shapes import from_shape, to_shape

logger = logging.getLogger(__name__)

app = typer.Typer(help="Decode and encode hex EWKB geography values")

KindOption = Annotated[
    GeometryKind,
    typer.Option("--kind", "-k", help="Shape kind stored in the column"),
]
WktOption = Annotated[bool, typer.Option("--wkt", help="Use WKT instead of JSON")]


@app.callback()
def main(verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False) -> None:
    """Configure logging for the command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command()
def decode(
    data: Annotated[str, typer.Argument(help="Hex-encoded EWKB, as printed by PostGIS")],
    kind: KindOption = GeometryKind.POINT,
    wkt: WktOption = False,
) -> None:
    """Decode hex EWKB and print the value as JSON (or WKT)."""
    logger.debug(f"Decoding {len(data)} hex characters as {kind}")
    codec = DEFAULT_REGISTRY.codec_for(kind)
    try:
        value = codec.decode_hex(data.strip())
    except GeographyCodecError as e:
        _fail(str(e))

    if not wkt:
        typer.echo(value.model_dump_json(indent=2))
        return

    try:
        typer.echo(to_shape(value).wkt)
    except (GEOSException, ValueError) as e:
        _fail(f"Cannot show {kind} as WKT: {e}")


@app.command()
def encode(
    value: Annotated[str, typer.Argument(help="Value as JSON, e.g. '{\"x\": 1, \"y\": 2}'")],
    kind: KindOption = GeometryKind.POINT,
    wkt: WktOption = False,
    srid: Annotated[int | None, typer.Option(help="SRID for a WKT value")] = None,
) -> None:
    """Encode a JSON (or WKT) value and print its hex EWKB."""
    if wkt:
        try:
            parsed = from_shape(shapely.from_wkt(value), kind, srid=srid)
        except (GEOSException, ValueError) as e:
            _fail(f"Invalid {kind} WKT: {e}")
    else:
        try:
            parsed = MODELS[kind].model_validate_json(value)
        except ValidationError as e:
            _fail(f"Invalid {kind} value: {e}")

    codec = DEFAULT_REGISTRY.codec_for(kind)
    try:
        typer.echo(codec.encode_hex(parsed))
    except GeographyCodecError as e:
        _fail(str(e))


if __name__ == "__main__":
    app()
