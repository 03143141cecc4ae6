"""
Module: imposition.spreads

Purpose:
    Page orderings for two-up output. Reader spreads pair facing pages
    the way a reader sees them; saddle-stitch spreads reorder pages into
    printer signatures so that a folded, stapled stack reads in order.

Key Functions:
    - build_reader_spreads(): cover solo, interior pairs, back cover solo
    - build_saddle_stitch(): printer pairs for a folded signature

Key Classes:
    - Spread: (left page index, right page index or None)
    - InvalidPageCount: Page count does not suit the scheme

Dependencies:
    - dataclasses (std)

Used By:
    - printbook.imposition.builder: Spread documents
    - printbook.book.document: save() in spread mode, save_saddle_stitch()
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class InvalidPageCount(ValueError):
    """
    Page count does not meet an imposition scheme's preconditions.

    Attributes:
        page_count: Number of pages supplied
        suggested: Nearest valid page count, when there is one
    """

    def __init__(self, message: str, page_count: int, suggested: Optional[int] = None):
        super().__init__(message)
        self.page_count = page_count
        self.suggested = suggested


@dataclass(frozen=True)
class Spread:
    """
    A pairing of page indices on one output sheet side.

    `right` is None for a solo page (cover, back cover).

    Example:
        >>> Spread(1, 2).as_tuple()
        (1, 2)
        >>> Spread(0).is_solo
        True
    """

    left: int
    right: Optional[int] = None

    @property
    def is_solo(self) -> bool:
        return self.right is None

    @property
    def indices(self) -> Tuple[int, ...]:
        """Page indices on this spread, left first."""
        return (self.left,) if self.right is None else (self.left, self.right)

    def as_tuple(self) -> Tuple[int, Optional[int]]:
        return (self.left, self.right)


def build_reader_spreads(page_count: int) -> Tuple[Spread, ...]:
    """
    Reader spreads: first page solo, interior pages paired, last page solo.

    Args:
        page_count: Number of pages (n)

    Returns:
        (0, None), (1, 2), (3, 4), ..., (n-3, n-2), (n-1, None)

    Raises:
        InvalidPageCount: If n < 2 or n - 2 is odd

    Example:
        >>> [s.as_tuple() for s in build_reader_spreads(6)]
        [(0, None), (1, 2), (3, 4), (5, None)]
    """
    if page_count < 2:
        raise InvalidPageCount(
            f"Reader spreads require at least 2 pages, got {page_count}",
            page_count,
            suggested=2,
        )
    if (page_count - 2) % 2 != 0:
        raise InvalidPageCount(
            f"Reader spreads require an even page count, got {page_count}. "
            f"Try {page_count + 1} pages.",
            page_count,
            suggested=page_count + 1,
        )

    spreads: List[Spread] = [Spread(0)]
    for i in range(1, page_count - 1, 2):
        spreads.append(Spread(i, i + 1))
    spreads.append(Spread(page_count - 1))

    logger.debug(f"Built {len(spreads)} reader spreads for {page_count} pages")
    return tuple(spreads)


def build_saddle_stitch(page_count: int) -> Tuple[Spread, ...]:
    """
    Saddle-stitch printer spreads.

    For k in 0 .. n/2 - 1 the pair is (n-1-k, k) when k is even and
    (k, n-1-k) when k is odd. Alternating the outer page between left and
    right keeps each sheet's front and back in order once the stack is
    folded along the spine.

    Raises:
        InvalidPageCount: If n is zero or not divisible by 4. The message
            names the next valid count.

    Example:
        >>> [s.as_tuple() for s in build_saddle_stitch(8)]
        [(7, 0), (1, 6), (5, 2), (3, 4)]
    """
    if page_count <= 0 or page_count % 4 != 0:
        suggested = max(4, math.ceil(page_count / 4) * 4)
        raise InvalidPageCount(
            f"Saddle stitch requires a page count divisible by 4, got {page_count}. "
            f"Try {suggested} pages.",
            page_count,
            suggested=suggested,
        )

    last = page_count - 1
    spreads = tuple(
        Spread(last - k, k) if k % 2 == 0 else Spread(k, last - k)
        for k in range(page_count // 2)
    )
    logger.debug(f"Built {len(spreads)} saddle-stitch spreads for {page_count} pages")
    return spreads


def validate_spreads(spreads: Sequence[Spread], page_count: int) -> None:
    """
    Check every spread index refers to an existing page.

    Raises:
        InvalidPageCount: On the first index outside 0 .. page_count - 1
    """
    for spread in spreads:
        for index in spread.indices:
            if not 0 <= index < page_count:
                raise InvalidPageCount(
                    f"Spread {spread.as_tuple()} refers to page {index}, "
                    f"but only {page_count} pages exist",
                    page_count,
                )
