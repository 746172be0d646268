"""snsauth CLI -- inspect and verify saved SNS payloads.

Thin wrapper around the library using click.  ``canonical`` and
``check-url`` work offline; ``verify`` fetches the signing certificate.
"""

from __future__ import annotations

from pathlib import Path

import click

from snsauth import __version__
from snsauth.protocol import (
    Notification,
    SNSAuthError,
    SubscriptionConfirmation,
    canonicalize,
    decode_payload,
)
from snsauth.verify import HTTPFetcher, SignatureVerifier, VerifierConfig, validate_cert_url


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _error(exc: SNSAuthError) -> None:
    """Print ``<code>: <message>`` to stderr and exit 1."""
    click.echo(f"{exc.code}: {exc}", err=True)
    raise SystemExit(1)


def _load_message(path: Path) -> Notification | SubscriptionConfirmation:
    """Decode the saved payload in *path*."""
    return decode_payload(path.read_bytes())


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="snsauth")
def cli() -> None:
    """snsauth -- Amazon SNS message authentication tools."""


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def canonical(path: Path) -> None:
    """Print the canonical string SNS signed for the payload in PATH."""
    try:
        message = _load_message(path)
    except SNSAuthError as exc:
        _error(exc)
    click.echo(canonicalize(message).decode("utf-8"), nl=False)


@cli.command("check-url")
@click.argument("url")
@click.option("--scheme", default="https", show_default=True, help="Required URL scheme.")
def check_url(url: str, scheme: str) -> None:
    """Check that URL is a trusted SNS signing-certificate location."""
    try:
        validate_cert_url(url, VerifierConfig(required_scheme=scheme))
    except SNSAuthError as exc:
        _error(exc)
    click.echo(f"OK: {url}")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--timeout", default=10.0, show_default=True, help="Certificate fetch timeout (seconds)."
)
def verify(path: Path, timeout: float) -> None:
    """Verify the signature of the payload in PATH (fetches the certificate)."""
    fetcher = HTTPFetcher(timeout=timeout)
    try:
        message = _load_message(path)
        SignatureVerifier(fetcher).verify_message(message)
    except SNSAuthError as exc:
        _error(exc)
    finally:
        fetcher.close()
    click.echo(f"Signature OK: {message.type} {message.message_id}")
