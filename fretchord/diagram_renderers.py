"""Renderer implementations for chord diagram output formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from fretchord.chart import ChordChart
from fretchord.chord_models import MUTED, OPEN, STRING_COUNT, Finger, Fretted


def _escape_html(text: str) -> str:
    """Escape the three characters that are unsafe in HTML text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _num(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text or "0"


@dataclass(frozen=True)
class DiagramLayout:
    """
    Pixel geometry for one chord diagram.

    The diagram keeps a 3:4 aspect ratio and scales all strokes and fonts
    relative to a 600 px wide reference drawing.
    """

    width: float
    height: float

    BASE_WIDTH = 600.0
    ASPECT_RATIO = 3 / 4  # width : height

    @classmethod
    def for_viewport(
        cls, viewport_width: float, viewport_height: float | None = None
    ) -> "DiagramLayout":
        """Size a diagram to 90% of the viewport, never wider than the reference."""
        width = min(viewport_width * 0.9, cls.BASE_WIDTH)
        height = width / cls.ASPECT_RATIO

        if viewport_height is not None and height > viewport_height * 0.9:
            height = viewport_height * 0.9
            width = height * cls.ASPECT_RATIO

        return cls(width=width, height=height)

    @property
    def scale(self) -> float:
        return self.width / self.BASE_WIDTH

    @property
    def board_width(self) -> float:
        return self.width * 0.6

    @property
    def board_height(self) -> float:
        return self.height * 0.4

    @property
    def board_x(self) -> float:
        return (self.width - self.board_width) / 2

    @property
    def board_y(self) -> float:
        return self.height * 0.3

    @property
    def string_spacing(self) -> float:
        return self.board_width / (STRING_COUNT - 1)

    def string_x(self, string_index: int) -> float:
        return self.board_x + string_index * self.string_spacing


class DiagramRenderer(ABC):
    """Abstract chord diagram renderer."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(self, *, title: str, charts: Sequence[ChordChart]) -> str:
        """Render output into a file content string."""


class SvgDiagramRenderer(DiagramRenderer):
    """Render a single chord chart as a standalone SVG document."""

    FONT = "Arial"

    def __init__(self, layout: DiagramLayout | None = None) -> None:
        self.layout = layout or DiagramLayout(
            width=DiagramLayout.BASE_WIDTH,
            height=DiagramLayout.BASE_WIDTH / DiagramLayout.ASPECT_RATIO,
        )

    @property
    def default_extension(self) -> str:
        return ".svg"

    def render(self, *, title: str, charts: Sequence[ChordChart]) -> str:
        if len(charts) != 1:
            raise ValueError(f"SVG output holds exactly one chord, got {len(charts)}.")
        return self.render_chart(charts[0])

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _text(self, x: float, y: float, content: str, size: float, extra: str = "") -> str:
        attrs = f' {extra}' if extra else ""
        return (
            f'<text x="{_num(x)}" y="{_num(y)}" text-anchor="middle" '
            f'font-family="{self.FONT}" font-size="{_num(size)}"{attrs}>'
            f"{_escape_html(content)}</text>"
        )

    def _labels(self, chart: ChordChart) -> list[str]:
        lay = self.layout
        s = lay.scale
        record = chart.record
        parts = [
            self._text(lay.width / 2, 40 * s, record.display_name, 32 * s, 'font-weight="bold"'),
            self._text(
                lay.width / 2, 80 * s, f"Structure: {', '.join(record.structure)}", 16 * s
            ),
        ]
        for index, name in enumerate(chart.absolute.tuning):
            parts.append(
                self._text(lay.string_x(index), lay.height * 0.25, name, 14 * s, 'font-weight="bold"')
            )
        parts.append(
            self._text(lay.width / 2, lay.height * 0.8, f"Notes: {', '.join(record.note_names)}", 16 * s)
        )
        return parts

    def _grid(self, rows: int) -> list[str]:
        lay = self.layout
        fret_spacing = lay.board_height / rows
        parts = [
            f'<rect x="{_num(lay.board_x)}" y="{_num(lay.board_y)}" '
            f'width="{_num(lay.board_width)}" height="{_num(lay.board_height)}" '
            'fill="none" stroke="black" stroke-width="2"/>'
        ]
        bottom = lay.board_y + lay.board_height
        for index in range(STRING_COUNT):
            x = _num(lay.string_x(index))
            parts.append(
                f'<line x1="{x}" y1="{_num(lay.board_y)}" x2="{x}" y2="{_num(bottom)}" '
                'stroke="black" stroke-width="1"/>'
            )
        right = lay.board_x + lay.board_width
        for row in range(rows + 1):
            y = _num(lay.board_y + row * fret_spacing)
            parts.append(
                f'<line x1="{_num(lay.board_x)}" y1="{y}" x2="{_num(right)}" y2="{y}" '
                'stroke="black" stroke-width="1"/>'
            )
        return parts

    def _strings(self, chart: ChordChart) -> list[str]:
        lay = self.layout
        s = lay.scale
        rows = chart.diagram.window
        fret_spacing = lay.board_height / rows
        above = lay.board_y - 20 * s
        parts: list[str] = []

        for index, (marker, position) in enumerate(zip(chart.markers, chart.diagram.positions)):
            x = lay.string_x(index)
            if position == MUTED:
                parts.append(self._text(x, above, "X", 16 * s, 'font-weight="bold"'))
            elif position == OPEN or (isinstance(position, Fretted) and position.fret == 0):
                parts.append(
                    f'<circle cx="{_num(x)}" cy="{_num(above - 8 * s)}" r="{_num(8 * s)}" '
                    'fill="none" stroke="black" stroke-width="2"/>'
                )
            elif isinstance(position, Fretted) and 1 <= position.fret <= rows:
                y = lay.board_y + (position.fret - 0.5) * fret_spacing
                label = marker.label if isinstance(marker, Finger) else ""
                parts.append(f'<circle cx="{_num(x)}" cy="{_num(y)}" r="{_num(10 * s)}" fill="black"/>')
                parts.append(
                    self._text(x, y + 5 * s, label, 12 * s, 'fill="white" font-weight="bold"')
                )
        return parts

    def _base_fret(self, chart: ChordChart) -> list[str]:
        label = chart.diagram.fret_label
        if label is None:
            return []
        lay = self.layout
        fret_spacing = lay.board_height / chart.diagram.window
        return [
            self._text(
                lay.board_x - 25 * lay.scale,
                lay.board_y + fret_spacing / 2 + 5 * lay.scale,
                f"{label}fr",
                14 * lay.scale,
            )
        ]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_chart(self, chart: ChordChart) -> str:
        """Draw the fretboard grid, string markers, labels and base fret of one chord."""
        lay = self.layout
        body = [
            '<rect width="100%" height="100%" fill="white"/>',
            *self._labels(chart),
            *self._grid(chart.diagram.window),
            *self._strings(chart),
            *self._base_fret(chart),
        ]
        return (
            f'<svg width="{_num(lay.width)}" height="{_num(lay.height)}" '
            f'xmlns="http://www.w3.org/2000/svg">' + "".join(body) + "</svg>"
        )


class HtmlSheetRenderer(DiagramRenderer):
    """Render several chord charts into one printable, self-contained HTML page."""

    def __init__(self, svg_renderer: SvgDiagramRenderer | None = None) -> None:
        self.svg_renderer = svg_renderer or SvgDiagramRenderer()

    @property
    def default_extension(self) -> str:
        return ".html"

    def render(self, *, title: str, charts: Sequence[ChordChart]) -> str:
        svgs = [self.svg_renderer.render_chart(chart) for chart in charts]
        return self.build_html(title, svgs)

    def build_html(self, title: str, svgs: list[str]) -> str:
        """
        Wrap a list of SVG strings in a self-contained HTML document.

        Each SVG is placed in its own ``.chord`` card. The print stylesheet
        drops the shadows and keeps a card from splitting across pages.
        """
        title_safe = _escape_html(title)
        heading = f"  <h1>{title_safe}</h1>\n" if title else ""
        cards = "\n".join(f'    <div class="chord">{svg}</div>' for svg in svgs)

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title_safe}</title>
  <style>
    *, *::before, *::after {{ box-sizing: border-box; }}
    body {{
      font-family: Arial, sans-serif;
      background: #f0f0f0;
      margin: 0;
      padding: 2rem;
    }}
    h1 {{
      text-align: center;
      font-size: 1.6rem;
      margin-bottom: 2rem;
      color: #222;
    }}
    .sheet {{
      display: flex;
      flex-wrap: wrap;
      gap: 1.5rem;
      justify-content: center;
    }}
    .chord {{
      background: #fff;
      box-shadow: 0 2px 8px rgba(0, 0, 0, 0.15);
      padding: 0.5rem;
      max-width: 320px;
    }}
    .chord svg {{
      display: block;
      width: 100%;
      height: auto;
    }}
    @media print {{
      body {{
        background: #fff;
        padding: 0;
      }}
      .chord {{
        box-shadow: none;
        break-inside: avoid;
      }}
    }}
  </style>
</head>
<body>
{heading}  <div class="sheet">
{cards}
  </div>
</body>
</html>"""
