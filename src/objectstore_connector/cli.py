"""Command-line interface for objectstore-connector.

Commands:
    - operations: List every forwarded operation and its call shape
    - invoke: Run one operation by name against a storage endpoint

Arguments to ``invoke`` are parsed as JSON when they parse, otherwise they
are passed as plain strings:

    objectstore-connector invoke list_objects photos 2024/ true \
        --endpoint localhost --port 9000 --no-use-ssl
"""

import asyncio
import json
from collections.abc import Iterable, Mapping
from typing import Annotated, Any, Optional

import typer

from . import __version__
from .cli_params import (
    AccessKeyOption,
    DebugOption,
    EndpointOption,
    PathStyleOption,
    PortOption,
    RegionOption,
    SecretKeyOption,
    SessionTokenOption,
    UseSSLOption,
)
from .connector import ObjectStorageConnector
from .objectstorage import OPERATIONS
from .schemas import ConnectorSettings

STREAM_CHUNK_SIZE = 64 * 1024

app = typer.Typer(
    name="objectstore-connector",
    help="Forward object storage operations through the connector.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"objectstore-connector {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    Object storage connector: bucket, object, presign and notification operations.
    """
    pass


def _parse_argument(value: str) -> Any:
    """Decode a command-line argument as JSON, falling back to the raw string."""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _json_default(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _emit(result: Any) -> None:
    """Print an operation result: JSON for values, raw bytes for body streams."""
    if result is None:
        typer.echo("OK")
    elif isinstance(result, str):
        typer.echo(result)
    elif isinstance(result, bytes):
        typer.get_binary_stream("stdout").write(result)
    elif hasattr(result, "read"):
        stdout = typer.get_binary_stream("stdout")
        for chunk in iter(lambda: result.read(STREAM_CHUNK_SIZE), b""):
            stdout.write(chunk)
        stdout.flush()
    elif isinstance(result, (Mapping, list, tuple, bool, int, float)):
        typer.echo(json.dumps(result, indent=2, default=_json_default))
    elif isinstance(result, Iterable):
        for item in result:
            typer.echo(json.dumps(item, default=_json_default))
    else:
        typer.echo(str(result))


@app.command("operations")
def operations_cmd() -> None:
    """
    List every operation the connector forwards.
    """
    for spec in OPERATIONS:
        typer.echo(f"{spec.name:<34} {spec.shape.value}")


@app.command("invoke")
def invoke_cmd(
    operation: Annotated[str, typer.Argument(help="Operation name, e.g. make_bucket")],
    args: Annotated[
        Optional[list[str]],
        typer.Argument(help="Positional operation arguments (JSON or plain strings)"),
    ] = None,
    endpoint: EndpointOption = None,
    port: PortOption = None,
    use_ssl: UseSSLOption = True,
    access_key: AccessKeyOption = None,
    secret_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region: RegionOption = None,
    path_style: PathStyleOption = False,
    debug: DebugOption = False,
) -> None:
    """
    Invoke a storage operation by name.

    Examples:
        objectstore-connector invoke make_bucket photos --endpoint localhost \
            --port 9000 --no-use-ssl --path-style
        objectstore-connector invoke get_object photos cat.png > cat.png
        objectstore-connector invoke presigned_get_object photos cat.png 3600
    """
    try:
        config = ConnectorSettings(
            end_point=endpoint,
            port=port,
            use_ssl=use_ssl,
            access_key=access_key,
            secret_key=secret_key,
            session_token=session_token,
            region=region,
            path_style=path_style,
            debug=debug,
        )
        connector = ObjectStorageConnector(config)
        arguments = [_parse_argument(value) for value in args or []]

        result = asyncio.run(connector.invoke(operation, *arguments))
        _emit(result)

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
