from __future__ import annotations

from domain.models import Point, Size


def is_pannable(container: Size, diagram: Size) -> bool:
    return container.width < diagram.width or container.height < diagram.height


def clamp_axis(proposed: float, container_size: float, diagram_size: float, current: float) -> float:
    """Keep the diagram edge from moving inside the container on one axis.

    An axis where the diagram already fits is frozen at ``current``.
    """
    if container_size >= diagram_size:
        return current
    return min(0.0, max(container_size - diagram_size, proposed))


def clamp_pan(proposed: Point, container: Size, diagram: Size, current: Point) -> Point:
    return Point(
        x=clamp_axis(proposed.x, container.width, diagram.width, current.x),
        y=clamp_axis(proposed.y, container.height, diagram.height, current.y),
    )


def clamp_indicator_axis(
    proposed: float,
    container_size: float,
    diagram_size: float,
    scale: float,
    current: float,
) -> float:
    if container_size >= diagram_size:
        return current
    return min((diagram_size - container_size) * scale, max(0.0, proposed))


def clamp_indicator(
    proposed: Point,
    container: Size,
    diagram: Size,
    scale: float,
    current: Point,
) -> Point:
    return Point(
        x=clamp_indicator_axis(proposed.x, container.width, diagram.width, scale, current.x),
        y=clamp_indicator_axis(proposed.y, container.height, diagram.height, scale, current.y),
    )
