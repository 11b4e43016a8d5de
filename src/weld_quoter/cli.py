"""Command line entry point: estimate the weld labour of a job file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

from weld_quoter import __version__
from weld_quoter.config import ConfigError, configure_logging, get_logger, load_app_settings
from weld_quoter.engine.settings import WeldSettings
from weld_quoter.estimators import ItemEstimate, UnknownWeldTypeError, estimate_item, normalize_weld_type
from weld_quoter.pipe_data import UnknownPipeSizeError
from weld_quoter.render.summary import render_summary_text, summarize_job, summary_to_csv

logger = get_logger("cli")

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""

    p = argparse.ArgumentParser(
        prog="weld-quoter",
        description="Estimate welding labour for the items of a job file.",
    )
    p.add_argument("job", help="Job JSON file with an 'items' list.")
    p.add_argument("--settings", type=str, help="JSON file merged over the default settings.")
    p.add_argument("--csv", type=str, help="Write the item summary as CSV to this path.")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(list(argv) if argv is not None else sys.argv[1:])


def load_job(path: str | Path) -> dict[str, Any]:
    """Read a job file; raises ``ConfigError`` when it is unusable."""

    job_path = Path(path)
    try:
        raw = json.loads(job_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Job file not found: {job_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Malformed JSON in {job_path.name}: {exc}") from exc

    if isinstance(raw, list):
        raw = {"items": raw}
    if not isinstance(raw, Mapping) or not isinstance(raw.get("items"), list):
        raise ConfigError(f"{job_path.name} must contain an 'items' list")
    return dict(raw)


def estimate_job(job: Mapping[str, Any], app_settings: Mapping[str, Any]) -> list[ItemEstimate]:
    settings = WeldSettings.from_mapping(app_settings)
    all_defaults = dict(app_settings.get("defaults") or {})
    estimates: list[ItemEstimate] = []
    for raw in job["items"]:
        if not isinstance(raw, Mapping):
            logger.warning("Skipping job entry that is not an object: %r", raw)
            continue
        weld_type = normalize_weld_type(raw.get("type"))
        estimates.append(estimate_item(raw, settings, all_defaults.get(weld_type) or {}))
    return estimates


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        job = load_job(args.job)
        app_settings = load_app_settings(override_path=args.settings)
        estimates = estimate_job(job, app_settings)
    except (ConfigError, UnknownWeldTypeError, UnknownPipeSizeError, ValueError) as exc:
        message = exc.args[0] if isinstance(exc, KeyError) and exc.args else exc
        print(f"error: {message}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    title = str(job.get("job") or Path(args.job).stem)
    print(render_summary_text(estimates, title=title))

    if args.csv:
        out_path = Path(args.csv)
        out_path.write_text(summary_to_csv(summarize_job(estimates)), encoding="utf-8")
        logger.info("Wrote %d rows to %s", len(estimates), out_path)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
