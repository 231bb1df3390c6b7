"""Command-line interface for Activeledger SDK utilities.

Example:
    >>> # From terminal:
    >>> # activeledger --version
    >>> # activeledger keys generate --type rsa --name identity --out identity.json
    >>> # activeledger keys show identity.json
    >>> # activeledger keys sign identity.json '{"$namespace":"default"}'
    >>> # activeledger keys verify identity.json '{"$namespace":"default"}' <signature>
    >>> # activeledger tx send tx.json --url http://localhost:5260 [--encrypt]
"""

import json
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError

from activeledger import __version__
from activeledger.config import ConnectionConfig
from activeledger.connection import Connection, Transaction
from activeledger.constants import DEFAULT_TIMEOUT
from activeledger.errors import ActiveledgerError
from activeledger.key import EllipticCurve, KeyType, RSA
from activeledger.key.exporter import export_key
from activeledger.key.importer import import_key
from activeledger.observability import configure_logging

app = typer.Typer(help="Activeledger SDK CLI.")

keys_app = typer.Typer(help="RSA and EC key generation, signing and verification.")
app.add_typer(keys_app, name="keys")

tx_app = typer.Typer(help="Transaction operations.")
app.add_typer(tx_app, name="tx")

ENV_NODE_URL = "ACTIVELEDGER_NODE_URL"

_GENERATORS = {
    KeyType.RSA: RSA.generate,
    KeyType.EC: EllipticCurve.generate,
}


def _fail(exc: Exception) -> NoReturn:
    typer.echo(str(exc), err=True)
    raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


VERSION_OPTION = typer.Option(
    False,
    "--version",
    help="Show Activeledger SDK version and exit.",
    callback=_version_callback,
    is_eager=True,
)


@app.callback()
def cli(version: bool = VERSION_OPTION) -> None:
    """Activeledger SDK CLI entrypoint."""
    configure_logging()


@keys_app.command("generate")
def keys_generate(
    name: Annotated[str, typer.Option(..., "--name", "-n", help="Key name (identity in $sigs).")],
    out: Annotated[
        Path,
        typer.Option(..., "--out", "-o", help="Output path for the JSON key file."),
    ],
    key_type: Annotated[
        KeyType, typer.Option("--type", "-t", help="Key algorithm.")
    ] = KeyType.RSA,
) -> None:
    """Write a new key to a JSON key file (mode 0600)."""
    if out.exists() and out.is_dir():
        raise typer.BadParameter(f"Output path is a directory: {out}")
    try:
        key = _GENERATORS[key_type](name)
        export_key(key, out)
    except ActiveledgerError as exc:
        _fail(exc)
    typer.echo(f"{key_type.value} key '{name}' written to {out}")


@keys_app.command("show")
def keys_show(
    key_file: Annotated[Path, typer.Argument(help="Path to the JSON key file.")],
) -> None:
    """Print the key name, type and public PEM."""
    try:
        key = import_key(key_file)
        pem = key.get_pem()
    except ActiveledgerError as exc:
        _fail(exc)
    typer.echo(f"Name: {key.name}")
    typer.echo(f"Type: {key.key_type.value}")
    typer.echo(pem.public)


@keys_app.command("sign")
def keys_sign(
    key_file: Annotated[Path, typer.Argument(help="Path to the JSON key file.")],
    data: Annotated[str, typer.Argument(help="Data to sign (signed as UTF-8).")],
) -> None:
    """Print the base64 signature of DATA."""
    try:
        signature = import_key(key_file).sign(data)
    except ActiveledgerError as exc:
        _fail(exc)
    typer.echo(signature)


@keys_app.command("verify")
def keys_verify(
    key_file: Annotated[Path, typer.Argument(help="Path to the JSON key file.")],
    data: Annotated[str, typer.Argument(help="Data that was signed.")],
    signature: Annotated[str, typer.Argument(help="Base64 signature.")],
) -> None:
    """Verify SIGNATURE over DATA; exits 1 when it does not match."""
    try:
        valid = import_key(key_file).verify(data, signature)
    except ActiveledgerError as exc:
        _fail(exc)
    if not valid:
        typer.echo("Signature is invalid", err=True)
        raise typer.Exit(code=1)
    typer.echo("Signature is valid")


@tx_app.command("send")
def tx_send(
    tx_file: Annotated[Path, typer.Argument(help="Path to the transaction JSON file.")],
    url: Annotated[
        str, typer.Option(..., "--url", "-u", envvar=ENV_NODE_URL, help="Node URL.")
    ],
    encrypt: Annotated[
        bool, typer.Option("--encrypt", help="Encrypt with the node's public key.")
    ] = False,
    timeout: Annotated[
        float, typer.Option("--timeout", help="Request timeout in seconds.")
    ] = DEFAULT_TIMEOUT,
) -> None:
    """Send the transaction in TX_FILE and print the node's response."""
    try:
        tx_json = tx_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise typer.BadParameter(f"Cannot read transaction file {tx_file}: {exc}") from exc
    try:
        json.loads(tx_json)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON in transaction: {exc}") from exc
    try:
        config = ConnectionConfig(url=url, encrypt=encrypt, timeout_seconds=timeout)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid connection settings: {exc}") from exc

    try:
        with Connection.from_config(config) as connection:
            response = connection.send_transaction(Transaction(tx_json))
    except ActiveledgerError as exc:
        _fail(exc)
    typer.echo(response)


def main() -> None:
    """Run the Activeledger SDK CLI."""
    app()


if __name__ == "__main__":
    main()
