"""Renderer for drawing timeline frames using Pillow."""

import math

from PIL import Image, ImageDraw, ImageFont

from .geometry import GeometryDescriptor
from .orchestrator import TimelineSnapshot
from .projector import ProjectedNode
from .render_context import RenderContext


class Renderer:
    """Renders timeline snapshots as PIL Images."""

    def __init__(self, geometry: GeometryDescriptor, render_context: RenderContext):
        """
        Initialize renderer.

        Args:
            geometry: Circle placement; its view size is the image size
            render_context: Rendering configuration and theming
        """
        self.geometry = geometry
        self.context = render_context
        self.width = int(round(geometry.view_width))
        self.height = int(round(geometry.view_height))
        self.label_font = _load_font(render_context.label_font_size)
        self.clock_font = _load_font(render_context.clock_font_size)

    def render_frame(self, snapshot: TimelineSnapshot) -> Image.Image:
        """
        Render a snapshot as an image.

        Returns:
            Palette-mode PIL Image of the frame
        """
        img = Image.new("RGB", (self.width, self.height), self.context.background_color)

        overlay = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay, "RGBA")
        self._draw_arc(draw)
        for node in snapshot.visible_nodes:
            self._draw_node(draw, node)
            self._draw_label(overlay, draw, node)
        self._draw_clock(draw, str(snapshot.clock_display))

        combined = Image.alpha_composite(img.convert("RGBA"), overlay)

        return combined.convert("RGB").convert("P", palette=Image.Palette.ADAPTIVE)

    def _draw_arc(self, draw: ImageDraw.ImageDraw) -> None:
        g = self.geometry
        draw.ellipse(
            [g.center_x - g.radius, g.center_y - g.radius, g.center_x + g.radius, g.center_y + g.radius],
            outline=self.context.arc_color.to_rgba8(),
            width=self.context.arc_width,
        )

    def _draw_node(self, draw: ImageDraw.ImageDraw, node: ProjectedNode) -> None:
        cx, cy = node.position.cx, node.position.cy
        r = node.node_radius
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], outline=node.color.to_rgba8(), width=2)
        if node.should_draw_inner_dot:
            dot = node.inner_dot_radius
            draw.ellipse([cx - dot, cy - dot, cx + dot, cy + dot], fill=node.inner_dot_color.to_rgba8())

    def _draw_label(
        self, overlay: Image.Image, draw: ImageDraw.ImageDraw, node: ProjectedNode
    ) -> None:
        label = node.label
        color = (*self.context.label_color, node.color.to_rgba8()[3])
        if label.connector is not None:
            line = label.connector
            draw.line([(line.x1, line.y1), (line.x2, line.y2)], fill=color, width=1)

        text = "\n".join(label.lines)
        bbox = draw.multiline_textbbox((0, 0), text, font=self.label_font, align="center")
        text_width = math.ceil(bbox[2] - bbox[0])
        text_height = math.ceil(bbox[3] - bbox[1])
        if text_width <= 0 or text_height <= 0:
            return

        text_img = Image.new("RGBA", (text_width + 2, text_height + 2), (0, 0, 0, 0))
        ImageDraw.Draw(text_img).multiline_text(
            (1 - bbox[0], 1 - bbox[1]), text, font=self.label_font, fill=color, align="center"
        )
        # Pillow rotates counter-clockwise; the label rotation is clockwise in screen space.
        rotated = text_img.rotate(
            -label.rotation_degrees, expand=True, resample=Image.Resampling.BICUBIC
        )
        x = int(round(label.x - rotated.width / 2))
        y = int(round(label.y - rotated.height / 2))
        overlay.paste(rotated, (x, y), rotated)

    def _draw_clock(self, draw: ImageDraw.ImageDraw, clock_text: str) -> None:
        bbox = draw.textbbox((0, 0), clock_text, font=self.clock_font)
        text_width = bbox[2] - bbox[0]

        x = (self.width - text_width) / 2 - bbox[0]
        y = self.context.clock_margin - bbox[1]

        draw.text((x, y), clock_text, font=self.clock_font, fill=self.context.clock_color)


def _load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    return ImageFont.load_default(size=size)
