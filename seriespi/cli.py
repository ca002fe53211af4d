import logging
import os
import time

import click

from .bench import format_rows, keypoints, run_benchmark
from .constants import render_decimal
from .errors import SeriesPiError
from .formats import FORMATS, serialize_payload
from .precision import convert_precision
from .series import compute_pi
from .verify import extract_fractional_digits, read_fractional_digits_from_file, verify_fractional_digits


_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def _default_workers() -> int:
    return os.cpu_count() or 1


def _configure_logging(verbose: int):
    logging.basicConfig(
        level=_LEVELS[min(verbose, 2)],
        format="[%(asctime)s] %(threadName)-12s %(name)-18s (%(levelname)s) %(message)s",
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"], "auto_envvar_prefix": "SERIESPI"})
@click.option("-v", "--verbose", count=True, help="Repeat for more detail.")
def main(verbose: int):
    _configure_logging(verbose)


@main.command()
@click.option("--digits", default=1000, show_default=True, type=int)
@click.option("--workers", default=_default_workers, show_default="cpu count", type=int)
@click.option("--format", "fmt", type=click.Choice(FORMATS, case_sensitive=False), default="txt", show_default=True)
@click.option("--label/--no-label", default=False, show_default=True)
@click.option("--verify/--no-verify", default=False, show_default=True)
@click.option("--out", "out_path", default="", show_default=True)
def compute(digits: int, workers: int, fmt: str, label: bool, verify: bool, out_path: str):
    start = time.perf_counter()
    try:
        precision = convert_precision(digits)
        pi = compute_pi(digits, workers)
    except (SeriesPiError, ValueError) as exc:
        raise click.ClickException(str(exc))
    elapsed = time.perf_counter() - start
    s = render_decimal(pi, digits)
    display = ("Pi = " if label else "") + s
    meta = {
        "digits": digits,
        "workers": workers,
        "terms": precision.terms,
        "working_bits": precision.working_bits,
        "final_bits": precision.final_bits,
        "elapsed": round(elapsed, 6),
    }
    payload, _ = serialize_payload(display, fmt, meta)
    if verify:
        ok, kind = verify_fractional_digits(extract_fractional_digits(s), digits)
        if not ok:
            raise click.ClickException(f"verification failed ({kind})")
    if out_path:
        with open(out_path, "wb") as f:
            f.write(payload)
        click.echo(out_path)
    else:
        click.echo(payload.decode("utf-8").rstrip("\n"))


@main.command()
@click.option("--start", default=100, show_default=True, type=int)
@click.option("--stop", default=1000, show_default=True, type=int)
@click.option("--step", default=100, show_default=True, type=int)
@click.option("--workers", default=_default_workers, show_default="cpu count", type=int)
@click.option("--samples", default=10, show_default=True, type=int)
def bench(start: int, stop: int, step: int, workers: int, samples: int):
    try:
        points = keypoints(start, stop, step)
        rows = list(run_benchmark(points, workers, samples))
    except (SeriesPiError, ValueError) as exc:
        raise click.ClickException(str(exc))
    click.echo(format_rows(rows))


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--samples", default=1000, show_default=True, type=int)
@click.option("--tolerance", default=1, show_default=True, type=int)
def verify(path: str, samples: int, tolerance: int):
    try:
        fractional = read_fractional_digits_from_file(path, samples)
    except (KeyError, ValueError) as exc:
        raise click.ClickException(f"cannot read result: {exc}")
    ok, kind = verify_fractional_digits(fractional, samples, tolerance=tolerance)
    if not ok:
        raise click.ClickException(f"verification failed ({kind})")
    click.echo(f"ok: {kind}")
