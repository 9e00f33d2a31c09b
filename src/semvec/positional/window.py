"""
WindowPolicy: which neighbour offsets count as co-occurrences.

Offsets are neighbour position minus focus position. A window of radius r
admits every non-zero offset in [-r, r]. A truncated left radius t > 0
narrows the left side to [-t, -1]; t == 0 leaves the window symmetric.
"""

from dataclasses import dataclass
from typing import Iterator, Mapping, Tuple

from semvec.config.settings import Settings
from semvec.errors import ConfigurationError


@dataclass(frozen=True)
class WindowPolicy:
    """
    Sliding context window.

    Attributes:
        radius: Maximum distance on the right (and on the left unless truncated)
        truncated_left_radius: Reduced left radius, 0 for none

    Example:
        >>> window = WindowPolicy(radius=3, truncated_left_radius=1)
        >>> window.offsets()
        (-1, 1, 2, 3)
    """

    radius: int
    truncated_left_radius: int = 0

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ConfigurationError(f"Window radius must be >= 0, got {self.radius}")
        if not 0 <= self.truncated_left_radius <= self.radius:
            raise ConfigurationError(
                f"Truncated left radius must be in [0, {self.radius}], "
                f"got {self.truncated_left_radius}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowPolicy":
        return cls(settings.window_radius, settings.truncated_left_radius)

    @property
    def left_radius(self) -> int:
        if self.truncated_left_radius > 0:
            return self.truncated_left_radius
        return self.radius

    def admits(self, offset: int) -> bool:
        return offset != 0 and -self.left_radius <= offset <= self.radius

    def offsets(self) -> Tuple[int, ...]:
        """Admitted offsets in increasing order."""
        return tuple(o for o in range(-self.left_radius, self.radius + 1) if o != 0)

    def neighbours(
        self, focus: int, terms_at: Mapping[int, str]
    ) -> Iterator[Tuple[int, str]]:
        """
        Yield (offset, term) for every occupied position in the window.

        Args:
            focus: Focus position
            terms_at: position -> term for the positions of one document field
        """
        for offset in self.offsets():
            term = terms_at.get(focus + offset)
            if term is not None:
                yield offset, term
