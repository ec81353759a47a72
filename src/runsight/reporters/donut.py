"""Donut chart geometry and SVG markup for the status breakdown."""

from __future__ import annotations

import math
from dataclasses import dataclass

RADIUS = 60
STROKE_WIDTH = 16
_SIZE = 160
_CENTER = _SIZE // 2
CIRCUMFERENCE = 2 * math.pi * RADIUS

# Drawing order around the ring: passed, failed, skipped, timed out.
_SEGMENT_STYLES = (
    ("passed", "Passed", "var(--green)"),
    ("failed", "Failed", "var(--red)"),
    ("skipped", "Skipped", "var(--yellow)"),
    ("timedOut", "Timed Out", "var(--blue)"),
)


@dataclass(frozen=True)
class DonutSegment:
    """One coloured arc of the ring."""

    status: str
    label: str
    color: str
    count: int
    arc_length: float
    gap: float
    offset: float
    """Distance along the ring where the arc starts."""

    @property
    def dash_offset(self) -> float:
        return -self.offset


def donut_segments(
    passed: int,
    failed: int,
    skipped: int,
    timed_out: int,
    total: int,
) -> list[DonutSegment]:
    """Compute arcs that tile the ring in a fixed status order.

    Zero counts are dropped. Each arc starts where the previous one ended,
    so for a non-empty run the arc lengths sum to ``CIRCUMFERENCE``.
    """
    if total <= 0:
        return []

    counts = (passed, failed, skipped, timed_out)
    segments: list[DonutSegment] = []
    offset = 0.0
    for (status, label, color), count in zip(_SEGMENT_STYLES, counts, strict=True):
        if count <= 0:
            continue
        arc_length = count / total * CIRCUMFERENCE
        segments.append(
            DonutSegment(
                status=status,
                label=label,
                color=color,
                count=count,
                arc_length=arc_length,
                gap=CIRCUMFERENCE - arc_length,
                offset=offset,
            )
        )
        offset += arc_length
    return segments


def render_donut(
    passed: int,
    failed: int,
    skipped: int,
    timed_out: int,
    total: int,
    pass_rate: str,
) -> str:
    """Render the donut chart with its centre label and legend."""
    if total <= 0:
        return """<div class="donut-wrapper">
        <div class="donut-center">
          <div class="rate">—</div>
          <div class="rate-label">No tests</div>
        </div>
      </div>"""

    segments = donut_segments(passed, failed, skipped, timed_out, total)
    arcs = "".join(
        f'<circle class="donut-segment segment-{seg.status}" cx="{_CENTER}" cy="{_CENTER}" '
        f'r="{RADIUS}" fill="none" stroke="{seg.color}" stroke-width="{STROKE_WIDTH}" '
        f'stroke-dasharray="{seg.arc_length:.4f} {seg.gap:.4f}" '
        f'stroke-dashoffset="{seg.dash_offset:.4f}" opacity="0.9"/>'
        for seg in segments
    )
    legend = "".join(
        f'<div class="legend-item"><span class="legend-dot" style="background:{seg.color}">'
        f"</span> {seg.label} ({seg.count})</div>"
        for seg in segments
    )

    return f"""<div class="donut-wrapper">
        <svg viewBox="0 0 {_SIZE} {_SIZE}" width="{_SIZE}" height="{_SIZE}">
          <circle class="donut-track" cx="{_CENTER}" cy="{_CENTER}" r="{RADIUS}" fill="none" stroke="var(--border)" stroke-width="{STROKE_WIDTH}"/>
          {arcs}
        </svg>
        <div class="donut-center">
          <div class="rate">{pass_rate}%</div>
          <div class="rate-label">Pass Rate</div>
        </div>
      </div>
      <div class="donut-legend">{legend}</div>"""
