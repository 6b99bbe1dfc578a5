#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from lunarphase import lunar_phase_events
from lunarphase.core.errors import InvariantViolation
from lunarphase.core.time import jd_from_moment, moment_from_datetime
from lunarphase.core.types import PhaseEvent
from lunarphase.ephemeris.de422 import (
    DE422_JD_MAX,
    DE422_JD_MIN,
    DE422Elongation,
    ElongationProvider,
    true_phase_moment,
)

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 1440.0


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "lunarphase[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "lunarphase[diagnostics]"') from e


def phase_event_residuals(el: ElongationProvider, events: Iterable[PhaseEvent]) -> List[Tuple[PhaseEvent, float]]:
    """
    (event, model − ephemeris) pairs, residual in minutes.
    """
    out: List[Tuple[PhaseEvent, float]] = []
    for ev in events:
        t = moment_from_datetime(ev.when)
        t_true = true_phase_moment(el, t, ev.phase.angle)
        out.append((ev, (t - t_true) * MINUTES_PER_DAY))
    return out


def summarize(residuals: List[Tuple[PhaseEvent, float]]) -> dict:
    """Mean / std / max |r| in minutes, overall and per principal phase."""
    np = _need_numpy()
    r = np.array([x for _, x in residuals], dtype=float)
    summary = {
        "count": int(r.size),
        "mean_min": float(r.mean()) if r.size else 0.0,
        "std_min": float(r.std()) if r.size else 0.0,
        "max_abs_min": float(np.abs(r).max()) if r.size else 0.0,
        "by_phase": {},
    }
    for ev, _ in residuals:
        summary["by_phase"].setdefault(ev.phase.name, [])
    for name in summary["by_phase"]:
        rp = np.array([x for ev, x in residuals if ev.phase.name == name], dtype=float)
        summary["by_phase"][name] = {"count": int(rp.size), "mean_min": float(rp.mean()), "max_abs_min": float(np.abs(rp).max())}
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Compare principal-phase instants of the series model against DE422.")
    p.add_argument("--year-start", type=int, default=1900)
    p.add_argument("--year-end", type=int, default=2100)
    p.add_argument("--out-png", default=None, help="Optional residual plot")
    args = p.parse_args(argv)

    if args.year_end <= args.year_start:
        raise InvariantViolation("--year-end must be after --year-start")

    start = datetime(args.year_start, 1, 1, tzinfo=timezone.utc)
    end = datetime(args.year_end, 1, 1, tzinfo=timezone.utc)
    if jd_from_moment(moment_from_datetime(start)) < DE422_JD_MIN or jd_from_moment(moment_from_datetime(end)) > DE422_JD_MAX:
        raise InvariantViolation("requested range is outside the DE422 coverage")

    print("Loading DE422 Ephemeris...")
    el = DE422Elongation.load()

    residuals = phase_event_residuals(el, lunar_phase_events(start, end))
    s = summarize(residuals)
    logger.debug("validated %d events", s["count"])

    print(f"{s['count']} events {args.year_start}..{args.year_end}")
    print(f"  mean  = {s['mean_min']:+.3f} min")
    print(f"  std   = {s['std_min']:.3f} min")
    print(f"  max|r|= {s['max_abs_min']:.3f} min")
    for name, row in s["by_phase"].items():
        print(f"  {name:<14} n={row['count']:<6d} mean={row['mean_min']:+.3f} max|r|={row['max_abs_min']:.3f}")

    if args.out_png:
        np = _need_numpy()
        plt = _need_matplotlib()
        years = np.array([ev.when.year + (ev.when.timetuple().tm_yday - 1) / 365.25 for ev, _ in residuals])
        r = np.array([x for _, x in residuals])

        fig, ax = plt.subplots(1, 1, figsize=(12, 5))
        ax.scatter(years, r, s=2, alpha=0.6)
        ax.set_title("Principal phase instant error (series model − DE422)")
        ax.set_xlabel("Year")
        ax.set_ylabel("Error (minutes)")
        ax.grid(True, alpha=0.3)
        plt.tight_layout()
        plt.savefig(args.out_png, dpi=200)
        print(f"Plot saved to {args.out_png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
