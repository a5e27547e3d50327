"""Shared CLI parameter definitions.

Connection options are declared once here and reused by every command that
talks to the storage service, so names, environment variables and help text
stay consistent.

Usage:
    @app.command()
    def my_command(
        endpoint: Annotated[Optional[str], endpoint_option()] = None,
    ):
        pass
"""

from typing import Annotated, Optional

import typer


def endpoint_option() -> typer.models.OptionInfo:
    """Storage endpoint host option."""
    return typer.Option(
        "--endpoint", envvar="OBJECTSTORE_ENDPOINT", help="Storage service hostname"
    )


def port_option() -> typer.models.OptionInfo:
    """Storage endpoint port option."""
    return typer.Option("--port", envvar="OBJECTSTORE_PORT", help="Storage service port")


def use_ssl_option() -> typer.models.OptionInfo:
    """TLS toggle."""
    return typer.Option("--use-ssl/--no-use-ssl", help="Connect over TLS")


def access_key_option() -> typer.models.OptionInfo:
    """Access key option."""
    return typer.Option(
        "--access-key", envvar="OBJECTSTORE_ACCESS_KEY", help="Access key ID"
    )


def secret_key_option() -> typer.models.OptionInfo:
    """Secret key option."""
    return typer.Option(
        "--secret-key", envvar="OBJECTSTORE_SECRET_KEY", help="Secret access key"
    )


def session_token_option() -> typer.models.OptionInfo:
    """Session token option."""
    return typer.Option(
        "--session-token",
        envvar="OBJECTSTORE_SESSION_TOKEN",
        help="Session token for temporary credentials",
    )


def region_option() -> typer.models.OptionInfo:
    """Region option."""
    return typer.Option("--region", envvar="OBJECTSTORE_REGION", help="Region name")


def path_style_option() -> typer.models.OptionInfo:
    """Path-style addressing toggle."""
    return typer.Option("--path-style", help="Use path-style bucket addressing")


def debug_option() -> typer.models.OptionInfo:
    """Diagnostic logging toggle."""
    return typer.Option("--debug", help="Log every forwarded operation")


EndpointOption = Annotated[Optional[str], endpoint_option()]
PortOption = Annotated[Optional[int], port_option()]
UseSSLOption = Annotated[bool, use_ssl_option()]
AccessKeyOption = Annotated[Optional[str], access_key_option()]
SecretKeyOption = Annotated[Optional[str], secret_key_option()]
SessionTokenOption = Annotated[Optional[str], session_token_option()]
RegionOption = Annotated[Optional[str], region_option()]
PathStyleOption = Annotated[bool, path_style_option()]
DebugOption = Annotated[bool, debug_option()]
