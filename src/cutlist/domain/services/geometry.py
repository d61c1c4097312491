"""Rectangle and kerf geometry shared by the validator and the packer.

Free space on a board is a tuple of rectangles. Placing a part never
mutates a rectangle; it returns a new tuple with the used rectangle
replaced by its guillotine remainders.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "EPSILON",
    "Rect",
    "choose_orientation",
    "fits_within",
    "guillotine_split",
    "kerf_extent",
    "place_in_rect",
]

# Tolerance for float comparisons on inch dimensions
EPSILON = 1e-9


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle on a board.

    x and width run along the stock length, y and height along the
    stock width.
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Rectangle dimensions must be positive")

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def top_edge(self) -> float:
        return self.y + self.height

    def fits(self, width: float, height: float) -> bool:
        """Check if a width x height footprint fits without rotation."""
        return fits_within(width, height, self.width, self.height)


def fits_within(
    length: float,
    width: float,
    max_length: float,
    max_width: float,
) -> bool:
    """Check a length x width blank against a length x width space."""
    return length <= max_length + EPSILON and width <= max_width + EPSILON


def choose_orientation(
    rect: Rect,
    length: float,
    width: float,
    can_rotate: bool,
) -> bool | None:
    """Pick an orientation for a blank inside a free rectangle.

    The unrotated orientation (part length along the stock length) is
    always tried first.

    Returns:
        False for unrotated, True for rotated, None if neither fits.
    """
    if rect.fits(length, width):
        return False
    if can_rotate and rect.fits(width, length):
        return True
    return None


def kerf_extent(size: float, available: float, kerf: float) -> float:
    """Extent consumed along one axis by a blank and its saw cut.

    No cut is needed when the blank spans the whole available extent.
    Otherwise the blade removes up to one kerf width of the remainder.
    """
    if size >= available - EPSILON:
        return available
    return min(size + kerf, available)


def guillotine_split(
    rect: Rect,
    used_width: float,
    used_height: float,
) -> tuple[Rect, ...]:
    """Split the unused part of a rectangle into guillotine remainders.

    The first cut runs across the stock width at ``used_width``, leaving a
    full-height strip to the right. The second cut separates the area above
    the blank, limited to the used width.

    Args:
        rect: Rectangle the blank was placed in (at its origin).
        used_width: Extent consumed along x, kerf included.
        used_height: Extent consumed along y, kerf included.

    Returns:
        Zero, one or two remainder rectangles.
    """
    remainders: list[Rect] = []

    if rect.width - used_width > EPSILON:
        remainders.append(
            Rect(
                x=rect.x + used_width,
                y=rect.y,
                width=rect.width - used_width,
                height=rect.height,
            )
        )

    if rect.height - used_height > EPSILON:
        remainders.append(
            Rect(
                x=rect.x,
                y=rect.y + used_height,
                width=used_width,
                height=rect.height - used_height,
            )
        )

    return tuple(remainders)


def place_in_rect(
    free_rects: tuple[Rect, ...],
    index: int,
    width: float,
    height: float,
    kerf: float,
) -> tuple[Rect, ...]:
    """Place a footprint at the origin of ``free_rects[index]``.

    Args:
        free_rects: Current free rectangles of a board.
        index: Rectangle receiving the footprint.
        width: Footprint extent along x as placed.
        height: Footprint extent along y as placed.
        kerf: Saw kerf width.

    Returns:
        New free rectangle tuple with the used rectangle replaced by its
        remainders.
    """
    rect = free_rects[index]
    used_width = kerf_extent(width, rect.width, kerf)
    used_height = kerf_extent(height, rect.height, kerf)
    return (
        free_rects[:index]
        + free_rects[index + 1 :]
        + guillotine_split(rect, used_width, used_height)
    )
