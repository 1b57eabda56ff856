"""Wasted space report and image efficiency score."""

import logging
from decimal import ROUND_HALF_UP, Decimal

from ..exceptions import InvalidInputError
from ..models import FileOccurrence, Layer, WastedEntry, WastedReport

logger = logging.getLogger(__name__)

_TWO_PLACES = Decimal("0.01")


def group_occurrences(occurrences: list[FileOccurrence]) -> list[WastedEntry]:
    """Group occurrences by path in first-encounter order."""
    grouped: dict[str, WastedEntry] = {}
    for occurrence in occurrences:
        record = occurrence.record
        entry = grouped.get(record.path)
        if entry is None:
            grouped[record.path] = WastedEntry(
                path=record.path, total_size=record.size, count=1
            )
        else:
            entry.count += 1
            entry.total_size += record.size
    return list(grouped.values())


def efficiency_score(wasted_size: int, total_size: int) -> float:
    """Calculate the percentage of the image that is not wasted.

    Args:
        wasted_size: Sum of all wasted bytes
        total_size: Unpacked size of the whole image

    Returns:
        100 - wasted * 100 / total, rounded half up to 2 decimal places

    Raises:
        InvalidInputError: If total_size is not positive
    """
    if total_size <= 0:
        raise InvalidInputError(f"Total image size must be positive: {total_size}")

    score = Decimal(100) - Decimal(wasted_size * 100) / Decimal(total_size)
    return float(score.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def summarize(occurrences: list[FileOccurrence], total_size: int) -> WastedReport:
    """Build the wasted space report of an image.

    Every path written in more than one layer pays for its content more
    than once; the report sums those occurrences per path.

    Args:
        occurrences: Cross-layer file occurrences of the image
        total_size: Unpacked size of the whole image

    Returns:
        WastedReport sorted by total size, largest first. Paths with equal
        size keep their encounter order.

    Raises:
        InvalidInputError: If total_size is not positive
    """
    entries = group_occurrences(occurrences)
    entries.sort(key=lambda entry: entry.total_size, reverse=True)
    wasted_size = sum(entry.total_size for entry in entries)
    score = efficiency_score(wasted_size, total_size)

    logger.debug(
        "Summarized %d occurrences into %d paths, wasted %d of %d bytes",
        len(occurrences),
        len(entries),
        wasted_size,
        total_size,
    )
    return WastedReport(
        entries=entries,
        wasted_size=wasted_size,
        total_size=total_size,
        efficiency_score=score,
    )


def other_layers_size(layers: list[Layer], total_size: int) -> int:
    """Size of everything above the first non-empty layer.

    The first layer with a size above zero is treated as the base image,
    which is not necessarily layer 0.
    """
    for layer in layers:
        if layer.size > 0:
            return total_size - layer.unpacked_size
    return total_size
