"""
HEX Mosaic v1

A single-file Python tool that renders a raster image as a mosaic of regular
hexagons. Each hexagon is filled with the source colour found at its screen
position. The grid can be resized interactively and the current frame exported
to an auto-numbered PNG file.

Keys (interactive mode):
    Up / +      increase hexagon side by 5
    Down / -    decrease hexagon side by 5 (minimum 5)
    s           save the current frame
    Esc         quit

Usage:
    python main.py photo.jpg
    python main.py https://example.com/photo.png --side 20
    python main.py photo.jpg --snapshot --side 15 --output_dir frames --debug
"""

import argparse
import enum
import io
import math
import os
import re
import sys
from typing import Iterator, List, NamedTuple, Optional, Tuple

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame
import requests
from PIL import Image, ImageColor, ImageDraw


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------
class Color(NamedTuple):
    """An RGB colour value, usable directly as a Pillow fill."""

    r: int
    g: int
    b: int


# ---------------------------------------------------------------------------
# ColorParser
# ---------------------------------------------------------------------------
class ColorParser:
    """Parses color specifications from multiple string formats into Colors.

    Supports CSS named colours, hex codes (#RGB, #RRGGBB), and RGB
    comma-separated tuples (e.g. '255,128,0').
    """

    def parse(self, color_str: str) -> Color:
        """Parse a color string into a Color.

        Args:
            color_str: The color specification string.

        Returns:
            A Color with integer components in [0, 255].

        Raises:
            ValueError: If the color string cannot be parsed.
        """
        s = color_str.strip()

        if "," in s:
            return self._parse_rgb_tuple(s)

        try:
            rgb = ImageColor.getrgb(s)
        except (ValueError, AttributeError):
            raise ValueError(f"Invalid color specification: '{color_str}'")
        return Color(rgb[0], rgb[1], rgb[2])

    def _parse_rgb_tuple(self, s: str) -> Color:
        parts = [p.strip() for p in s.split(",")]
        if len(parts) != 3:
            raise ValueError(f"RGB tuple must have 3 components, got {len(parts)}: '{s}'")
        try:
            values = [int(p) for p in parts]
        except ValueError:
            raise ValueError(f"RGB components must be integers: '{s}'")
        for v in values:
            if v < 0 or v > 255:
                raise ValueError(f"RGB values must be in [0, 255], got {v}: '{s}'")
        return Color(*values)


# ---------------------------------------------------------------------------
# HexagonGeometry
# ---------------------------------------------------------------------------
class HexagonGeometry:
    """Vertex computation for pointy-top regular hexagons.

    Vertex k sits at angle 30 + k * 60 degrees from the centre, so rows of
    hexagons staggered by half a column tile the plane without gaps.

    Attributes:
        side: Edge length of the hexagon, equal to its circumradius.
    """

    START_ANGLE: float = math.pi / 6.0
    STEP_ANGLE: float = math.pi / 3.0

    def __init__(self, side: float) -> None:
        self._side: float = side

    @property
    def side(self) -> float:
        """Return the side length."""
        return self._side

    @staticmethod
    def polar_to_cartesian(
        center: Tuple[float, float], radius: float, angle: float
    ) -> Tuple[float, float]:
        """Convert a polar offset around a centre into a cartesian point.

        Args:
            center: The (x, y) origin of the polar system.
            radius: Distance from the centre.
            angle: Angle in radians.

        Returns:
            The (x, y) point.
        """
        return (center[0] + radius * math.cos(angle),
                center[1] + radius * math.sin(angle))

    def vertices(self, cx: float, cy: float) -> List[Tuple[float, float]]:
        """Compute the 6 vertices of a hexagon centred at (cx, cy).

        Args:
            cx: X coordinate of the hexagon centre.
            cy: Y coordinate of the hexagon centre.

        Returns:
            A list of 6 (x, y) tuples, starting at 30 degrees and proceeding
            in 60-degree steps.
        """
        return [
            self.polar_to_cartesian((cx, cy), self._side,
                                    self.START_ANGLE + k * self.STEP_ANGLE)
            for k in range(6)
        ]


# ---------------------------------------------------------------------------
# GridParameters
# ---------------------------------------------------------------------------
class GridParameters:
    """Immutable hexagon side length with its derived grid spacing.

    The spacing is computed once in the constructor. A size change returns a
    new instance, so the intervals always match the side they came from.

    Attributes:
        side: Hexagon side length in pixels.
        interval_x: Horizontal distance between centres, 2 * cos(30) * side.
        interval_y: Vertical distance between rows, 1.5 * side.
    """

    MIN_SIDE: float = 5.0
    STEP: float = 5.0

    def __init__(self, side: float = MIN_SIDE) -> None:
        """Initialise the grid parameters.

        Args:
            side: Hexagon side in pixels, a finite multiple of STEP >= MIN_SIDE.

        Raises:
            ValueError: If the side is not finite, below MIN_SIDE, or off the
                STEP lattice.
        """
        if not math.isfinite(side):
            raise ValueError(f"Hexagon side must be a finite number, got {side}")
        if side < self.MIN_SIDE:
            raise ValueError(f"Hexagon side must be >= {self.MIN_SIDE:g}, got {side:g}")
        if side % self.STEP != 0:
            raise ValueError(f"Hexagon side must be a multiple of {self.STEP:g}, got {side:g}")
        self._side: float = float(side)
        self._interval_x: float = 2.0 * math.cos(math.pi / 6.0) * self._side
        self._interval_y: float = 1.5 * self._side

    @property
    def side(self) -> float:
        """Return the hexagon side length."""
        return self._side

    @property
    def interval_x(self) -> float:
        """Return the horizontal centre spacing, 2 * cos(30) * side."""
        return self._interval_x

    @property
    def interval_y(self) -> float:
        """Return the vertical row spacing, 1.5 * side."""
        return self._interval_y

    def resized(self, direction: int) -> "GridParameters":
        """Return the parameters after one size step.

        A positive direction adds STEP to the side. A negative direction
        subtracts STEP unless that would go below MIN_SIDE, in which case
        the current parameters are returned unchanged.

        Args:
            direction: +1 to grow, -1 to shrink.

        Returns:
            A GridParameters instance for the new side.
        """
        if direction > 0:
            return GridParameters(self._side + self.STEP)
        if direction < 0 and self._side - self.STEP >= self.MIN_SIDE:
            return GridParameters(self._side - self.STEP)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridParameters):
            return NotImplemented
        return self._side == other._side

    def __hash__(self) -> int:
        return hash(self._side)

    def __repr__(self) -> str:
        return (f"GridParameters(side={self._side:g}, "
                f"interval_x={self._interval_x:.3f}, interval_y={self._interval_y:.3f})")


# ---------------------------------------------------------------------------
# StaggeredGrid
# ---------------------------------------------------------------------------
class StaggeredGrid:
    """Offset-row coordinate system for the hexagon mosaic.

    Cell (i, j) is column i of row j. Odd rows are shifted right by half a
    column, giving the brick-like stagger that pointy-top hexagons need.
    """

    def __init__(self, params: GridParameters) -> None:
        self._params = params

    @staticmethod
    def cell_center(i: int, j: int, interval_x: float, interval_y: float) -> Tuple[float, float]:
        """Convert a cell coordinate to the hexagon centre in pixels.

        Args:
            i: Column index.
            j: Row index.
            interval_x: Horizontal centre spacing.
            interval_y: Vertical centre spacing.

        Returns:
            The (x, y) centre.
        """
        x = i * interval_x + (interval_x / 2.0 if j % 2 == 1 else 0.0)
        y = j * interval_y
        return (x, y)

    def center(self, i: int, j: int) -> Tuple[float, float]:
        """Centre of cell (i, j) using this grid's spacing."""
        return self.cell_center(i, j, self._params.interval_x, self._params.interval_y)

    def dimensions(self, width: int, height: int) -> Tuple[int, int]:
        """Return (nb_columns, nb_rows) needed to cover a width x height viewport."""
        nb_columns = math.ceil(width / self._params.interval_x)
        nb_rows = math.ceil(height / self._params.interval_y)
        return nb_columns, nb_rows

    def cells(self, width: int, height: int) -> Iterator[Tuple[int, int]]:
        """Yield every cell covering the viewport, column-outer, row-inner.

        Both bounds are inclusive so the last partial column and row are drawn.
        """
        nb_columns, nb_rows = self.dimensions(width, height)
        for i in range(nb_columns + 1):
            for j in range(nb_rows + 1):
                yield i, j


# ---------------------------------------------------------------------------
# PixelSampler
# ---------------------------------------------------------------------------
class PixelSampler:
    """Nearest-pixel colour lookup on a loaded image.

    Positions are normalised to the image, (0, 0) being the top-left pixel.
    With the default "wrap" policy an index past the end of the row-major
    pixel buffer wraps around modulo the buffer length, so lookups never
    fail. The "clamp" policy pins the column and row to the image edge.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    EDGE_POLICIES: Tuple[str, ...] = ("wrap", "clamp")

    def __init__(self, image: Image.Image, edge_policy: str = "wrap") -> None:
        if edge_policy not in self.EDGE_POLICIES:
            raise ValueError(f"Invalid edge policy '{edge_policy}'. "
                             f"Must be one of: {', '.join(self.EDGE_POLICIES)}")
        if image.width * image.height == 0:
            raise ValueError("Image has no pixels")
        self._image = image if image.mode == "RGB" else image.convert("RGB")
        self._pixels = self._image.load()
        self._edge_policy = edge_policy

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def __len__(self) -> int:
        return self.width * self.height

    def flat_index(self, norm_x: float, norm_y: float) -> int:
        """Return the buffer index of the pixel nearest a normalised position.

        Args:
            norm_x: Horizontal position, nominally in [0, 1].
            norm_y: Vertical position, nominally in [0, 1].

        Returns:
            A valid index into the row-major pixel buffer.
        """
        column = math.floor(self.width * norm_x)
        row = math.floor(self.height * norm_y)
        if self._edge_policy == "clamp":
            column = min(max(column, 0), self.width - 1)
            row = min(max(row, 0), self.height - 1)
        return (row * self.width + column) % len(self)

    def pixel_at(self, index: int) -> Color:
        """Return the pixel at a flat buffer index, wrapping out-of-range values."""
        index %= len(self)
        x, y = index % self.width, index // self.width
        r, g, b = self._pixels[x, y][:3]
        return Color(r, g, b)

    def sample(self, norm_x: float, norm_y: float) -> Color:
        """Return the colour of the pixel nearest a normalised position."""
        return self.pixel_at(self.flat_index(norm_x, norm_y))


# ---------------------------------------------------------------------------
# MosaicRenderer
# ---------------------------------------------------------------------------
class MosaicRenderer:
    """Renders one frame of the hexagon mosaic into a Pillow image.

    Every cell covering the viewport is visited column by column. The cell
    centre is folded back into the viewport to pick a sample position, but
    the hexagon is drawn at the real centre, so cells hanging over the right
    and bottom edges take their colour from the opposite side of the image.
    """

    def __init__(
        self,
        color_background: Color = Color(0, 0, 0),
        color_line: Optional[Color] = None,
    ) -> None:
        """Initialise the renderer.

        Args:
            color_background: Colour the frame is cleared to.
            color_line: Hexagon outline colour. None strokes each hexagon in
                its own fill colour, leaving no visible border.
        """
        self._color_background = color_background
        self._color_line = color_line

    def render(
        self,
        sampler: PixelSampler,
        width: int,
        height: int,
        params: GridParameters,
    ) -> Tuple[Image.Image, int]:
        """Render a complete mosaic frame.

        Args:
            sampler: Colour source for the hexagons.
            width: Viewport width in pixels.
            height: Viewport height in pixels.
            params: Current hexagon side and spacing.

        Returns:
            A tuple of (frame image, polygon count drawn).
        """
        frame = Image.new("RGB", (width, height), self._color_background)
        draw = ImageDraw.Draw(frame)

        grid = StaggeredGrid(params)
        geom = HexagonGeometry(params.side)

        polygon_count = 0
        for i, j in grid.cells(width, height):
            cx, cy = grid.center(i, j)
            wx, wy = cx % width, cy % height
            color = sampler.sample(wx / width, wy / height)
            outline = self._color_line if self._color_line is not None else color
            draw.polygon(geom.vertices(cx, cy), fill=color, outline=outline)
            polygon_count += 1

        return frame, polygon_count


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
class Command(enum.Enum):
    """Semantic commands the mosaic responds to."""

    INCREASE_SIZE = "increase_size"
    DECREASE_SIZE = "decrease_size"
    SAVE_FRAME = "save_frame"


def apply_command(params: GridParameters, command: Command) -> Tuple[GridParameters, bool]:
    """Apply a command to the grid parameters.

    Args:
        params: The current grid parameters.
        command: The command to apply.

    Returns:
        A tuple of (new parameters, whether a frame save was requested).
    """
    if command is Command.INCREASE_SIZE:
        return params.resized(+1), False
    if command is Command.DECREASE_SIZE:
        return params.resized(-1), False
    return params, command is Command.SAVE_FRAME


# ---------------------------------------------------------------------------
# ImageLoader
# ---------------------------------------------------------------------------
class ImageLoader:
    """Loads the source image from a local file or an HTTP(S) URL."""

    URL_PREFIXES: Tuple[str, ...] = ("http://", "https://")

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout

    def is_url(self, source: str) -> bool:
        """Return True if the source should be downloaded."""
        return source.lower().startswith(self.URL_PREFIXES)

    def load(self, source: str) -> Image.Image:
        """Load and decode an image, converting it to RGB.

        Args:
            source: Local path or http(s) URL.

        Returns:
            The decoded RGB image.

        Raises:
            ValueError: If the image cannot be fetched or decoded, or is empty.
        """
        try:
            if self.is_url(source):
                image = Image.open(io.BytesIO(self._fetch(source)))
            else:
                image = Image.open(source)
            image.load()
        except FileNotFoundError:
            raise ValueError(f"Image file not found: '{source}'")
        except requests.RequestException as e:
            raise ValueError(f"Cannot download image '{source}': {e}")
        except Image.DecompressionBombError as e:
            raise ValueError(f"Image too large '{source}': {e}")
        except OSError as e:
            raise ValueError(f"Cannot decode image '{source}': {e}")

        if image.width * image.height == 0:
            raise ValueError(f"Image has no pixels: '{source}'")
        return image.convert("RGB")

    def _fetch(self, url: str) -> bytes:
        response = requests.get(url, timeout=self._timeout)
        response.raise_for_status()
        return response.content


# ---------------------------------------------------------------------------
# ViewportSizer
# ---------------------------------------------------------------------------
class ViewportSizer:
    """Fits the image into a window no larger than a fraction of the screen.

    Attributes:
        fraction: Share of the display resolution used as the size cap.
    """

    def __init__(self, fraction: float = 0.75) -> None:
        if not 0.0 < fraction <= 1.0:
            raise ValueError(f"Screen fraction must be in (0, 1], got {fraction:g}")
        self._fraction = fraction

    def screen_cap(self, display_width: int, display_height: int) -> Tuple[int, int]:
        """Return the maximum window size for a display resolution."""
        return (max(int(display_width * self._fraction), 1),
                max(int(display_height * self._fraction), 1))

    def fit(self, image_width: int, image_height: int,
            cap_width: int, cap_height: int) -> Tuple[int, int]:
        """Compute the viewport size for an image.

        A landscape image wider than the cap is scaled to the cap width; a
        portrait (or square) image taller than the cap is scaled to the cap
        height. Anything else keeps its native size. The aspect ratio is
        always preserved.

        Args:
            image_width: Source image width.
            image_height: Source image height.
            cap_width: Maximum window width.
            cap_height: Maximum window height.

        Returns:
            The (width, height) of the viewport in pixels.
        """
        scale = 1.0
        if image_width > image_height:
            if image_width > cap_width:
                scale = cap_width / image_width
        elif image_height > cap_height:
            scale = cap_height / image_height
        return (max(int(image_width * scale), 1),
                max(int(image_height * scale), 1))

    @staticmethod
    def detect_display() -> Tuple[int, int]:
        """Return the desktop resolution reported by pygame."""
        pygame.display.init()
        info = pygame.display.Info()
        return info.current_w, info.current_h


# ---------------------------------------------------------------------------
# FrameExporter
# ---------------------------------------------------------------------------
class FrameExporter:
    """Saves frames to sequentially numbered PNG files.

    Files are named ``<prefix>-NNNNNN.png`` inside a fixed directory. Numbers
    already taken on disk are skipped, so a save never replaces an earlier one.
    """

    DIGITS: int = 6

    def __init__(self, directory: str = "output", prefix: str = "hexagons") -> None:
        self._directory = directory
        self._prefix = prefix
        self._counter = 0

    def next_path(self) -> str:
        """Reserve and return the next unused output path."""
        while True:
            self._counter += 1
            name = f"{self._prefix}-{self._counter:0{self.DIGITS}d}.png"
            path = os.path.join(self._directory, name)
            if not os.path.exists(path):
                return path

    def save(self, frame: Image.Image) -> str:
        """Write a frame to the next numbered file.

        Args:
            frame: The fully rendered frame.

        Returns:
            The path written.
        """
        os.makedirs(self._directory, exist_ok=True)
        path = self.next_path()
        frame.save(path, "PNG")
        return path


# ---------------------------------------------------------------------------
# KeyboardAdapter
# ---------------------------------------------------------------------------
class KeyboardAdapter:
    """Translates pygame key events into mosaic Commands."""

    KEYMAP = {
        pygame.K_s: Command.SAVE_FRAME,
        pygame.K_UP: Command.INCREASE_SIZE,
        pygame.K_PLUS: Command.INCREASE_SIZE,
        pygame.K_EQUALS: Command.INCREASE_SIZE,
        pygame.K_KP_PLUS: Command.INCREASE_SIZE,
        pygame.K_DOWN: Command.DECREASE_SIZE,
        pygame.K_MINUS: Command.DECREASE_SIZE,
        pygame.K_KP_MINUS: Command.DECREASE_SIZE,
    }

    def translate(self, event: "pygame.event.Event") -> Optional[Command]:
        """Return the Command for a key press, or None for anything else."""
        if event.type != pygame.KEYDOWN:
            return None
        return self.KEYMAP.get(event.key)


# ---------------------------------------------------------------------------
# MosaicWindow
# ---------------------------------------------------------------------------
class MosaicWindow:
    """Interactive frame loop.

    Each tick drains pending input, renders one complete frame with the
    resulting grid parameters, writes a requested save from that finished
    frame, and only then presents it. Input is never applied mid-frame.
    """

    def __init__(
        self,
        sampler: PixelSampler,
        viewport: Tuple[int, int],
        params: GridParameters,
        renderer: MosaicRenderer,
        exporter: FrameExporter,
        title: str = "HEX Mosaic",
        fps: int = 60,
    ) -> None:
        self.sampler = sampler
        self.viewport = viewport
        self.params = params
        self.renderer = renderer
        self.exporter = exporter
        self.title = title
        self.fps = fps
        self.running = True
        self.saved_paths: List[str] = []
        self._adapter = KeyboardAdapter()
        self._save_requested = False

    def handle_event(self, event: "pygame.event.Event") -> None:
        """Update loop state from one pygame event."""
        if event.type == pygame.QUIT:
            self.running = False
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False
            return

        command = self._adapter.translate(event)
        if command is None:
            return
        self.params, save = apply_command(self.params, command)
        if save:
            self._save_requested = True

    def tick(self) -> Image.Image:
        """Render one frame, performing any pending save afterwards.

        Returns:
            The rendered frame.
        """
        width, height = self.viewport
        frame, _ = self.renderer.render(self.sampler, width, height, self.params)
        if self._save_requested:
            path = self.exporter.save(frame)
            self.saved_paths.append(path)
            self._save_requested = False
            print(f"  Saved: {path}")
        return frame

    def caption(self) -> str:
        return f"{self.title} - side {self.params.side:g}"

    def run(self) -> None:
        """Open the window and loop until it is closed."""
        pygame.init()
        try:
            screen = pygame.display.set_mode(self.viewport)
            pygame.display.set_caption(self.caption())
            clock = pygame.time.Clock()
            shown_params = self.params

            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                if not self.running:
                    break

                if self.params != shown_params:
                    pygame.display.set_caption(self.caption())
                    shown_params = self.params

                frame = self.tick()
                surface = pygame.image.frombytes(frame.tobytes(), frame.size, "RGB")
                screen.blit(surface, (0, 0))
                pygame.display.flip()
                clock.tick(self.fps)
        finally:
            pygame.quit()


# ---------------------------------------------------------------------------
# Version helper
# ---------------------------------------------------------------------------
def _changelog_version(fallback: str = "0.0.0") -> str:
    """Read the highest version from CHANGELOG.md next to this script.

    Scans for ``## [X.Y.Z]`` headings (skipping ``[Unreleased]``) and returns
    the first match, which is the highest version.  Returns *fallback* when the
    file is missing or contains no versioned headings.
    """
    changelog = os.path.join(os.path.dirname(os.path.abspath(__file__)), "CHANGELOG.md")
    try:
        with open(changelog, "r", encoding="utf-8") as fh:
            for line in fh:
                m = re.match(r"^##\s+\[(\d+\.\d+\.\d+)\]", line)
                if m:
                    return m.group(1)
    except OSError:
        pass
    return fallback


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------
class Application:
    """Top-level entry point for HEX Mosaic.

    Parses the command line, loads the image, sizes the viewport, and either
    opens the interactive window or renders and saves a single frame.
    """

    VERSION:      str = _changelog_version("1.0.0")
    BUILD_DATE:   str = "2026-10-17"
    TITLE:        str = "HEX Mosaic"
    BANNER_WIDTH: int = 60

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Execute the application.

        Args:
            argv: Command-line arguments, defaulting to sys.argv[1:].

        Returns:
            None
        """
        args = self._build_parser().parse_args(argv)

        try:
            params = GridParameters(args.side)
            sizer = ViewportSizer(args.screen_fraction)
            if args.fps < 1:
                raise ValueError(f"FPS must be >= 1, got {args.fps}")
            parser = ColorParser()
            color_background = parser.parse(args.color_background)
            color_line = parser.parse(args.color_line) if args.color_line else None
            image = ImageLoader().load(args.image)
            sampler = PixelSampler(image, edge_policy=args.edge_policy)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        renderer = MosaicRenderer(color_background=color_background, color_line=color_line)
        exporter = FrameExporter(directory=args.output_dir, prefix=args.prefix)

        native = (image.width, image.height)
        if args.snapshot and args.screen_width is None and args.screen_height is None:
            display = cap = native
        else:
            try:
                display = self._resolve_display(args, native if args.snapshot else None)
            except pygame.error as e:
                print(f"Error: Cannot query display: {e}", file=sys.stderr)
                sys.exit(1)
            cap = sizer.screen_cap(*display)
        viewport = sizer.fit(image.width, image.height, *cap)

        self._print_banner()

        if args.snapshot:
            frame, polygon_count = renderer.render(sampler, viewport[0], viewport[1], params)
            path = exporter.save(frame)
            print(f"  Saved: {path} ({self._format_file_size(os.path.getsize(path))})")
            if args.debug:
                self._print_debug(args, image, display, viewport, params, polygon_count)
            print()
            return

        if args.debug:
            self._print_debug(args, image, display, viewport, params, None)
        window = MosaicWindow(sampler, viewport, params, renderer, exporter,
                              title=self.TITLE, fps=args.fps)
        window.run()
        print()

    def _resolve_display(
        self, args: argparse.Namespace, fallback: Optional[Tuple[int, int]]
    ) -> Tuple[int, int]:
        """Return the display resolution, honouring explicit CLI overrides.

        Args:
            args: Parsed arguments.
            fallback: Resolution to assume instead of querying pygame, or None
                to detect the real display.

        Returns:
            The (width, height) display resolution.
        """
        width, height = args.screen_width, args.screen_height
        if width is None or height is None:
            detected = fallback if fallback is not None else ViewportSizer.detect_display()
            width = detected[0] if width is None else width
            height = detected[1] if height is None else height
        return width, height

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build the argparse ArgumentParser."""
        banner = self._banner_text()

        class _BannerParser(argparse.ArgumentParser):
            """ArgumentParser that prints the banner before help text."""

            def print_help(self, file=None):
                if file is None:
                    file = sys.stdout
                file.write(banner + "\n\n")
                super().print_help(file)

        parser = _BannerParser(
            description="HEX Mosaic: render an image as an interactive hexagon mosaic.",
        )
        parser.add_argument("image", type=str,
                            help="Source image path or http(s) URL")
        parser.add_argument("--side", type=float, default=GridParameters.MIN_SIDE,
                            help="Initial hexagon side in pixels, multiple of 5, >= 5 (default: 5)")
        parser.add_argument("--screen_fraction", type=float, default=0.75,
                            help="Fraction of the display used as window cap (default: 0.75)")
        parser.add_argument("--screen_width", type=int, default=None,
                            help="Display width override in pixels (default: detected)")
        parser.add_argument("--screen_height", type=int, default=None,
                            help="Display height override in pixels (default: detected)")
        parser.add_argument("--color_background", type=str, default="black",
                            help="Background colour (default: black)")
        parser.add_argument("--color_line", type=str, default=None,
                            help="Hexagon outline colour (default: same as fill)")
        parser.add_argument("--edge_policy", choices=PixelSampler.EDGE_POLICIES, default="wrap",
                            help="Out-of-range sampling: wrap or clamp (default: wrap)")
        parser.add_argument("--output_dir", type=str, default="output",
                            help="Directory for saved frames (default: output)")
        parser.add_argument("--prefix", type=str, default="hexagons",
                            help="File name prefix for saved frames (default: hexagons)")
        parser.add_argument("--fps", type=int, default=60,
                            help="Frame-rate cap in interactive mode (default: 60)")
        parser.add_argument("--snapshot", nargs="?", const=True, default=False,
                            type=self._parse_bool_flag,
                            help="Render and save one frame without opening a window")
        parser.add_argument("--debug", nargs="?", const=True, default=False,
                            type=self._parse_bool_flag,
                            help="Enable debug output")
        return parser

    def _parse_bool_flag(self, value: str) -> bool:
        """Parse a boolean flag value ('true'/'false' or bare flag)."""
        if isinstance(value, bool):
            return value
        if value.lower() in ("true", "1", "yes"):
            return True
        if value.lower() in ("false", "0", "no"):
            return False
        raise argparse.ArgumentTypeError(f"Boolean value expected, got '{value}'")

    def _banner_text(self) -> str:
        w = self.BANNER_WIDTH
        inner = w - 2  # space between │ and │
        lines = [
            "┌" + "─" * inner + "┐",
            f"│{'  Program:    ' + self.TITLE:<{inner}}│",
            f"│{'  Version:    ' + self.VERSION:<{inner}}│",
            f"│{'  Build Date: ' + self.BUILD_DATE:<{inner}}│",
            "└" + "─" * inner + "┘",
        ]
        return "\n".join(lines)

    def _print_banner(self) -> None:
        """Print the application banner to stdout."""
        print(self._banner_text())

    def _print_debug(
        self,
        args: argparse.Namespace,
        image: Image.Image,
        display: Tuple[int, int],
        viewport: Tuple[int, int],
        params: GridParameters,
        polygon_count: Optional[int],
    ) -> None:
        """Print debug information to stdout.

        Args:
            args: The resolved parameters.
            image: The loaded source image.
            display: Display resolution the cap was taken from.
            viewport: Resolved viewport size.
            params: Initial grid parameters.
            polygon_count: Polygons drawn, or None before the first frame.

        Returns:
            None
        """
        nb_columns, nb_rows = StaggeredGrid(params).dimensions(*viewport)
        print(f"\n  Source:           {args.image}")
        print(f"  Image size:       {image.width} x {image.height}")
        print(f"  Display:          {display[0]} x {display[1]}")
        print(f"  Viewport:         {viewport[0]} x {viewport[1]}")
        print(f"  Hexagon side:     {params.side:g}")
        print(f"  Interval X / Y:   {params.interval_x:.3f} / {params.interval_y:.3f}")
        print(f"  Grid:             {nb_columns + 1} columns x {nb_rows + 1} rows")
        print(f"  Edge policy:      {args.edge_policy}")
        print(f"  Background:       {args.color_background}")
        print(f"  Output:           {os.path.join(args.output_dir, args.prefix)}-NNNNNN.png")
        if polygon_count is not None:
            print(f"  Polygons drawn:   {polygon_count}")

    def _format_file_size(self, size_bytes: int) -> str:
        """Format a file size in human-readable form (e.g. '1.23 MB')."""
        if size_bytes < 1024:
            return f"{size_bytes} B"
        elif size_bytes < 1024 * 1024:
            return f"{size_bytes / 1024:.2f} KB"
        else:
            return f"{size_bytes / (1024 * 1024):.2f} MB"


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main() -> None:
    """Main entry point for HEX Mosaic."""
    if sys.stdout and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    app = Application()
    app.run()


if __name__ == "__main__":
    main()
