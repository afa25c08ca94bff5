"""DisplayWindow: shifts absolute fret positions into a chord diagram's window."""

import logging

from fretchord.chord_models import (
    DISPLAY_WINDOW_FRETS,
    AbsoluteFretAssignment,
    Fretted,
    NormalizedDiagram,
    Position,
)

logger = logging.getLogger(__name__)


class DisplayWindow:
    """
    Fits a chord into a fixed-height diagram while keeping open strings open.

    Only fretted strings above the nut take part: the lowest of them is moved
    to the first row of the window and the shift is reported as the base fret.
    Open and muted strings are never moved. A fretted string that still falls
    below the window after shifting is logged and returned as is; renderers
    decide how to draw it.
    """

    def __init__(self, frets: int = DISPLAY_WINDOW_FRETS) -> None:
        """
        Args:
            frets: Number of fret rows the diagram can show.
        """
        self.frets = frets

    def _subtract_amount(self, fingered: list[int]) -> int:
        lowest = min(fingered)
        span = max(fingered) - lowest

        if lowest >= 2:
            return lowest - 1
        if span > self.frets:
            return max(0, lowest - 1)
        return 0

    def normalize(self, absolute: AbsoluteFretAssignment) -> NormalizedDiagram:
        """
        Shift the fretted strings of *absolute* into the display window.

        Args:
            absolute: Resolved positions, lowest string first.

        Returns:
            NormalizedDiagram whose ``base_fret`` is the size of the shift.
        """
        fingered = [
            p.fret for p in absolute.positions if isinstance(p, Fretted) and p.fret > 0
        ]
        if not fingered:
            return NormalizedDiagram(positions=absolute.positions, base_fret=0, window=self.frets)

        subtract = self._subtract_amount(fingered)

        positions: list[Position] = []
        for position in absolute.positions:
            if isinstance(position, Fretted) and position.fret > 0:
                positions.append(Fretted(position.fret - subtract))
            else:
                positions.append(position)

        diagram = NormalizedDiagram(positions=tuple(positions), base_fret=subtract, window=self.frets)
        if diagram.overflow:
            logger.warning(
                "Diagram overflow: frets %s exceed the %d-fret window (base fret %d)",
                diagram.labels,
                self.frets,
                subtract,
            )
        return diagram


def normalize_fret_positions(absolute: AbsoluteFretAssignment) -> NormalizedDiagram:
    """Normalize *absolute* into the standard five-fret window."""
    return DisplayWindow().normalize(absolute)
