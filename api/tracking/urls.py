"""
Carrier tracking URL generation.

Tracking numbers are grouped and each group becomes one carrier page URL:
    <base>?tLabels=<tn1>%2C<tn2>%2C...
"""

from __future__ import annotations

from typing import Iterator, Sequence

DEFAULT_URL_BASE = "https://tools.usps.com/go/TrackConfirmAction.action"
DEFAULT_CHUNK_SIZE = 30
LABEL_SEPARATOR = "%2C"


def chunked(items: Sequence[str], size: int) -> Iterator[Sequence[str]]:
    if size <= 0:
        raise ValueError("chunk size must be > 0")
    for i in range(0, len(items), size):
        yield items[i : i + size]


def tracking_url(tracking_numbers: Sequence[str], *, url_base: str = DEFAULT_URL_BASE) -> str:
    return f"{url_base}?tLabels={LABEL_SEPARATOR.join(tracking_numbers)}"


def build_tracking_urls(
    tracking_numbers: Sequence[str],
    *,
    url_base: str = DEFAULT_URL_BASE,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> list[str]:
    """
    One URL per consecutive group of at most `chunk_size` tracking numbers.

    Input order is preserved; no tracking numbers means no URLs.
    """
    return [tracking_url(chunk, url_base=url_base) for chunk in chunked(tracking_numbers, chunk_size)]
