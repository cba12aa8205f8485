"""CLI for randomlib."""

from __future__ import annotations

import logging
import sys

import click

from randomlib import __version__
from randomlib.errors import RandomLibError
from randomlib.log import configure_logging


@click.group()
@click.version_option(__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log buffer activity to stderr.")
@click.option("--buffer-size", default=None, type=int, help="Bytes fetched per fill (>= 256).")
@click.pass_context
def main(ctx: click.Context, verbose: bool, buffer_size: int | None) -> None:
    """randomlib: buffered random numbers from a secure byte source."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    ctx.ensure_object(dict)
    ctx.obj["buffer_size"] = buffer_size


# ────────────────────────────────────────────────────────────
# Generation
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--min", "low", default=0, type=int, help="Smallest value (inclusive).")
@click.option("--max", "high", default=10, type=int, help="Largest value (inclusive).")
@click.option("--num", default=10, type=int, help="How many integers.")
@click.option("--unique", is_flag=True, help="No repeated values.")
@click.pass_context
def ints(ctx: click.Context, low: int, high: int, num: int, unique: bool) -> None:
    """Print random integers, one per line."""
    values = _run(ctx, lambda rng: rng.random_ints(min=low, max=high, num=num, unique=unique))
    for v in values:
        click.echo(v)


@main.command()
@click.option("--num", default=10, type=int, help="How many floats.")
@click.option("--unique", is_flag=True, help="No repeated values.")
@click.pass_context
def floats(ctx: click.Context, num: int, unique: bool) -> None:
    """Print random floats in [0, 1), one per line."""
    values = _run(ctx, lambda rng: rng.random_floats(num=num, unique=unique))
    for v in values:
        click.echo(repr(v))


# ────────────────────────────────────────────────────────────
# Report
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--num", default=10000, type=int, help="Values to generate per check.")
@click.option("--min", "low", default=0, type=int, help="Integer range start.")
@click.option("--max", "high", default=9, type=int, help="Integer range end.")
@click.pass_context
def report(ctx: click.Context, num: int, low: int, high: int) -> None:
    """Generate values and show quality metrics."""
    from randomlib.stats import float_report, int_report

    fl = float_report(_run(ctx, lambda rng: rng.random_floats(num=num)))
    it = int_report(_run(ctx, lambda rng: rng.random_ints(min=low, max=high, num=num)), low, high)

    click.echo(f"Floats: {fl['samples']:,} samples")
    click.echo(f"  Grade:              {fl['grade']}")
    click.echo(f"  Mean:               {fl['mean']:.6f} (expect 0.5)")
    click.echo(f"  Variance:           {fl['variance']:.6f} (expect 0.083333)")
    click.echo(f"  Chi-squared:        {fl['chi_squared']['chi2']:.2f} (df={fl['chi_squared']['df']})")
    click.echo(f"  Serial correlation: {fl['serial_correlation']:+.6f}")
    click.echo()
    click.echo(f"Ints [{low}, {high}]: {it['samples']:,} samples")
    click.echo(f"  Grade:              {it['grade']}")
    click.echo(f"  Unique values:      {it['unique_values']}")
    click.echo(f"  Shannon entropy:    {it['shannon_entropy']:.4f} bits")
    click.echo(f"  Chi-squared:        {it['chi_squared']['chi2']:.2f} (df={it['chi_squared']['df']})")


# ────────────────────────────────────────────────────────────
# Server
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--port", default=8042, help="Port to listen on.")
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.pass_context
def serve(ctx: click.Context, port: int, host: str) -> None:
    """Start an HTTP server handing out random numbers.

    Endpoints:

        GET /api/v1/ints?min=A&max=B&num=N&unique=1

        GET /api/v1/floats?num=N&unique=1

        GET /health
    """
    from randomlib.http_server import run_server

    rng = _make_generator(ctx)
    click.echo(f"randomlib server v{__version__}")
    click.echo(f"   Listening on http://{host}:{port}")
    click.echo(f"   Source: {rng.source.name} (buffer {rng.buffer.size} bytes)")
    click.echo()
    try:
        run_server(rng, host=host, port=port)
    finally:
        rng.close()


# ────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────


def _make_generator(ctx: click.Context):
    from randomlib.generator import Generator

    try:
        return Generator(buffer_size=ctx.obj.get("buffer_size"))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--buffer-size") from e


def _run(ctx: click.Context, submit) -> list:
    """Run one generation call to completion, exiting non-zero on failure."""
    with _make_generator(ctx) as rng:
        try:
            return submit(rng).result()
        except (RandomLibError, ValueError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
