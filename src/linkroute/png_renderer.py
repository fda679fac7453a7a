"""
PNG Renderer module for linkroute.

Draws obstacle boxes and routed links as a PNG image. This is the
reference implementation of the renderer side of Link.render(view).
"""

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from .box import Box
from .geometry import Point
from .links import Link, LinkType

# Samples per cubic curve when drawing bezier links
BEZIER_STEPS = 24


class PNGRenderer:
    """Renders links and boxes as PNG images."""

    def __init__(
        self,
        scale: int = 2,  # For high-resolution output
        margin: int = 20,
        line_width: int = 1,
        arrow_size: int = 8,
    ):
        self.scale = scale
        self.margin = margin
        self.line_width = line_width
        self.arrow_size = arrow_size

        # Colors
        self.bg_color = (255, 255, 255)
        self.box_fill = (245, 245, 245)
        self.box_outline = (0, 0, 0)
        self.line_color = (0, 0, 0)

        self.origin = Point(0, 0)
        self.draw: Optional[ImageDraw.ImageDraw] = None

    def render(
        self,
        links: Sequence[Link],
        boxes: Iterable[Box] = (),
        output_path: str = "links.png",
    ) -> str:
        """
        Render boxes and links to a PNG file.

        Args:
            links: Links to draw
            boxes: Obstacle boxes to draw underneath the links
            output_path: Path to save the PNG file

        Returns:
            Path to the saved PNG file
        """
        boxes = list(boxes)
        xs: List[float] = []
        ys: List[float] = []
        for box in boxes:
            xs.extend((box.left, box.right))
            ys.extend((box.top, box.bottom))
        for link in links:
            for point in self._link_outline(link):
                xs.append(point.x)
                ys.append(point.y)

        if not xs:
            # Nothing to draw: write a small placeholder image
            Image.new("RGB", (100, 100), self.bg_color).save(output_path)
            return output_path

        self.origin = Point(min(xs) - self.margin, min(ys) - self.margin)
        width = int((max(xs) - min(xs) + 2 * self.margin) * self.scale) + 1
        height = int((max(ys) - min(ys) + 2 * self.margin) * self.scale) + 1

        img = Image.new("RGB", (width, height), self.bg_color)
        self.draw = ImageDraw.Draw(img)
        try:
            for box in boxes:
                self._draw_box(box)
            for link in links:
                link.render(self)
        finally:
            self.draw = None

        img.save(output_path, "PNG", dpi=(300, 300))
        return output_path

    def render_link(self, link: Link) -> None:
        """
        Draw one link onto the open image.

        Raises:
            RuntimeError: If called outside render()
        """
        if self.draw is None:
            raise RuntimeError("render_link() called outside render()")

        outline = self._link_outline(link)
        pixels = [self._to_pixels(p) for p in outline]
        width = max(1, self.line_width * self.scale)
        self.draw.line(pixels, fill=self.line_color, width=width)

        if link.end_marker:
            self._draw_arrowhead(pixels[-2], pixels[-1])
        if link.start_marker:
            self._draw_arrowhead(pixels[1], pixels[0])

    def _link_outline(self, link: Link) -> List[Point]:
        """Points to stroke for a link; bezier links are sampled."""
        points = link.points
        if link.kind != LinkType.BEZIER:
            return points
        first, second = link.control_points
        return bezier_samples(points[0], first, second, points[-1])

    def _to_pixels(self, point: Point) -> Tuple[float, float]:
        return (
            (point.x - self.origin.x) * self.scale,
            (point.y - self.origin.y) * self.scale,
        )

    def _draw_box(self, box: Box):
        """Draw an obstacle box with border."""
        self.draw.rectangle(
            [self._to_pixels(Point(box.left, box.top)),
             self._to_pixels(Point(box.right, box.bottom))],
            fill=self.box_fill,
            outline=self.box_outline,
            width=max(1, self.scale),
        )

    def _draw_arrowhead(
        self, from_point: Tuple[float, float], to_point: Tuple[float, float]
    ):
        """Draw an arrowhead at to_point, pointing away from from_point."""
        x1, y1 = from_point
        x2, y2 = to_point
        if (x1, y1) == (x2, y2):
            return

        arrow_size = self.arrow_size * self.scale
        angle = math.atan2(y2 - y1, x2 - x1)
        angle1 = angle + math.pi * 0.8
        angle2 = angle - math.pi * 0.8

        ax1 = x2 + arrow_size * math.cos(angle1)
        ay1 = y2 + arrow_size * math.sin(angle1)
        ax2 = x2 + arrow_size * math.cos(angle2)
        ay2 = y2 + arrow_size * math.sin(angle2)

        self.draw.polygon([(x2, y2), (ax1, ay1), (ax2, ay2)], fill=self.line_color)


def bezier_samples(
    p0: Point, c1: Point, c2: Point, p3: Point, steps: int = BEZIER_STEPS
) -> List[Point]:
    """Sample a cubic bezier curve into steps + 1 points."""
    samples = []
    for k in range(steps + 1):
        t = k / steps
        u = 1 - t
        a, b, c, d = u * u * u, 3 * u * u * t, 3 * u * t * t, t * t * t
        samples.append(
            Point(
                a * p0.x + b * c1.x + c * c2.x + d * p3.x,
                a * p0.y + b * c1.y + c * c2.y + d * p3.y,
            )
        )
    return samples


def render_to_png(
    links: Sequence[Link],
    boxes: Iterable[Box] = (),
    output_path: str = "links.png",
    **kwargs,
) -> str:
    """
    Convenience function to render links to PNG.

    Args:
        links: Links to draw
        boxes: Obstacle boxes
        output_path: Path to save the PNG file
        **kwargs: Additional parameters for PNGRenderer

    Returns:
        Path to the saved PNG file
    """
    renderer = PNGRenderer(**kwargs)
    return renderer.render(links, boxes, output_path)
