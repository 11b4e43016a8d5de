"""Split one zone's volume across the processes assigned to it.

Two modes are supported:

* width thresholds (:func:`apportion_by_width`): each :class:`ProcessLayer`
  takes over once the groove has opened to its ``min_width``;
* legacy fixed percentages (:func:`apportion_by_distribution`): the zone is
  split root/fill/cap by a :class:`ZoneDistribution`.

Width mode treats a layer's share of the groove as ``average width x depth
fraction``. Because the groove width of a straight-sided bevel grows linearly
with depth, the depth fraction of a width window is exactly its share of the
width range and the estimate equals the true integral. Curved or multi-angle
bevels would break that equivalence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from weld_quoter.engine.types import Process, ProcessLayer, ZoneDistribution

NORMALIZE_TOLERANCE_PCT = 0.01
DISTRIBUTION_TOLERANCE_PCT = 0.1

__all__ = [
    "DISTRIBUTION_TOLERANCE_PCT",
    "LayerShare",
    "NORMALIZE_TOLERANCE_PCT",
    "apportion_by_distribution",
    "apportion_by_width",
    "sort_layers",
    "validate_distribution",
    "validate_layers",
]


@dataclass(frozen=True, slots=True)
class LayerShare:
    """Portion of a zone volume welded with one process.

    ``width_start``/``width_end`` bound the groove-width window of the layer
    and are ``None`` for percentage splits.
    """

    process: Process
    volume: float
    percentage: float
    width_start: float | None = None
    width_end: float | None = None


def sort_layers(layers: Iterable[ProcessLayer]) -> tuple[ProcessLayer, ...]:
    """Return ``layers`` ordered by ascending ``min_width`` (stable)."""

    return tuple(sorted(layers, key=lambda layer: layer.min_width))


def validate_layers(layers: Sequence[ProcessLayer]) -> bool:
    """Return ``True`` when ``min_width`` values are distinct and non-negative."""

    widths = [layer.min_width for layer in layers]
    if any(width < 0 for width in widths):
        return False
    return len(set(widths)) == len(widths)


def validate_distribution(distribution: ZoneDistribution) -> bool:
    """Return ``True`` when the three zone percentages sum to 100 +/- 0.1."""

    return abs(distribution.total_pct - 100.0) <= DISTRIBUTION_TOLERANCE_PCT


def _rescale(shares: list[LayerShare], zone_volume: float) -> tuple[LayerShare, ...]:
    """Rescale percentages off by more than the tolerance; volumes always sum to the zone."""

    total_pct = sum(share.percentage for share in shares)
    if total_pct <= 0.0:
        return tuple(shares)
    rescale_pct = abs(total_pct - 100.0) > NORMALIZE_TOLERANCE_PCT
    rescaled = []
    for share in shares:
        fraction = share.percentage / total_pct
        rescaled.append(
            LayerShare(
                process=share.process,
                volume=zone_volume * fraction,
                percentage=fraction * 100.0 if rescale_pct else share.percentage,
                width_start=share.width_start,
                width_end=share.width_end,
            )
        )
    return tuple(rescaled)


def apportion_by_width(
    layers: Sequence[ProcessLayer],
    zone_volume: float,
    root_gap: float,
    top_width: float,
    *,
    default_process: Process = Process.SMAW,
) -> tuple[LayerShare, ...]:
    """Split ``zone_volume`` across ``layers`` by groove-width thresholds.

    With no layers the whole zone goes to ``default_process``. A groove that
    never opens (``top_width <= root_gap``) goes entirely to the first layer,
    as does a groove that never reaches any layer's window.
    """

    if not layers:
        return (LayerShare(default_process, zone_volume, 100.0),)

    ordered = sort_layers(layers)
    width_range = top_width - root_gap
    if width_range <= 0.0:
        return (LayerShare(ordered[0].process, zone_volume, 100.0, root_gap, top_width),)

    reference_area = (root_gap + top_width) / 2.0
    shares: list[LayerShare] = []
    for index, layer in enumerate(ordered):
        start = max(layer.min_width, root_gap)
        if index + 1 < len(ordered):
            end = min(ordered[index + 1].min_width, top_width)
        else:
            end = top_width
        if end <= start:
            continue

        depth_fraction = (end - start) / width_range
        layer_area = (start + end) / 2.0 * depth_fraction
        pct = layer_area / reference_area * 100.0
        shares.append(
            LayerShare(
                process=layer.process,
                volume=zone_volume * pct / 100.0,
                percentage=pct,
                width_start=start,
                width_end=end,
            )
        )

    if not shares:
        return (LayerShare(ordered[0].process, zone_volume, 100.0, root_gap, top_width),)

    return _rescale(shares, zone_volume)


def apportion_by_distribution(
    distribution: ZoneDistribution,
    zone_volume: float,
) -> tuple[LayerShare, ...]:
    """Split ``zone_volume`` root/fill/cap by fixed percentages."""

    return tuple(
        LayerShare(process=process, volume=zone_volume * pct / 100.0, percentage=pct)
        for process, pct in distribution.pairs()
    )
