"""Vector path types for glyph outlines.

This module defines the outline representation handed to the path rasterizer:
- PathVerb: Enum for drawing command kinds
- PathCommand: One drawing command with its points
- Path: An immutable sequence of drawing commands
- PathBuilder: Incremental construction of a Path
- BoundingBox: Axis-aligned bounds in font units
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class PathVerb(Enum):
    """Drawing command kind.

    - MOVE_TO: Start a new contour at one point
    - LINE_TO: Straight segment to one point
    - QUAD_TO: Quadratic Bezier (control point, end point), TrueType style
    - BEZIER_TO: Cubic Bezier (two control points, end point), CFF style
    - CLOSE: Close the current contour
    """

    MOVE_TO = auto()
    LINE_TO = auto()
    QUAD_TO = auto()
    BEZIER_TO = auto()
    CLOSE = auto()


@dataclass(frozen=True, slots=True)
class PathCommand:
    """A single drawing command.

    Attributes:
        verb: Kind of command
        points: Points consumed by the command, in font units
    """

    verb: PathVerb
    points: tuple[tuple[float, float], ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with verb name and point list
        """
        return {"verb": self.verb.name, "points": [list(p) for p in self.points]}


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        x_min: Left edge
        y_min: Bottom edge
        x_max: Right edge
        y_max: Top edge
    """

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min


@dataclass(frozen=True)
class Path:
    """An immutable glyph outline.

    Paths are shared between the glyph cache and every caller that looks the
    glyph up, so they must never be mutated after construction.

    Attributes:
        commands: Drawing commands in order
    """

    commands: tuple[PathCommand, ...] = ()

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self):
        return iter(self.commands)

    def is_empty(self) -> bool:
        """Check if the path draws nothing.

        Returns:
            True if the path has no drawing commands, False otherwise
        """
        return not self.commands

    def contour_count(self) -> int:
        """Count contours (one per MOVE_TO)."""
        return sum(1 for cmd in self.commands if cmd.verb is PathVerb.MOVE_TO)

    def bounding_box(self) -> BoundingBox | None:
        """Calculate the control-point bounding box.

        Returns:
            BoundingBox over every point of every command, or None if empty
        """
        xs = [p[0] for cmd in self.commands for p in cmd.points]
        ys = [p[1] for cmd in self.commands for p in cmd.points]
        if not xs:
            return None
        return BoundingBox(min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with the command list
        """
        return {"commands": [cmd.to_dict() for cmd in self.commands]}


class PathBuilder:
    """Collects drawing commands and produces an immutable Path.

    Example:
        builder = PathBuilder()
        builder.move_to(0, 0)
        builder.line_to(100, 0)
        builder.close()
        path = builder.build()
    """

    def __init__(self) -> None:
        self._commands: list[PathCommand] = []

    def move_to(self, x: float, y: float) -> None:
        self._commands.append(PathCommand(PathVerb.MOVE_TO, ((x, y),)))

    def line_to(self, x: float, y: float) -> None:
        self._commands.append(PathCommand(PathVerb.LINE_TO, ((x, y),)))

    def quad_to(self, cx: float, cy: float, x: float, y: float) -> None:
        self._commands.append(PathCommand(PathVerb.QUAD_TO, ((cx, cy), (x, y))))

    def bezier_to(
        self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float
    ) -> None:
        self._commands.append(
            PathCommand(PathVerb.BEZIER_TO, ((c1x, c1y), (c2x, c2y), (x, y)))
        )

    def close(self) -> None:
        self._commands.append(PathCommand(PathVerb.CLOSE))

    def is_empty(self) -> bool:
        return not self._commands

    def build(self) -> Path:
        """Freeze the collected commands into a Path."""
        return Path(tuple(self._commands))
