"""Unit tests for icon, monochrome, and banner rendering."""

from unittest.mock import patch

import numpy as np
import pytest
from PIL import Image

from splashcraft.imaging import ImageLoader, encode_png
from splashcraft.models import GradientConfig, IconConfig, MeshConfig
from splashcraft.render import (
    IconImages,
    draw_banner,
    draw_icon,
    draw_monochrome_icon,
    gradient_axis,
    linear_gradient,
    mesh_gradient,
    render_icon_png,
    shape_mask,
)
from tests.conftest import open_png

BLUE = (0x3B, 0x82, 0xF6, 255)


def _close(pixel: tuple[int, ...], expected: tuple[int, ...], tol: int = 3) -> bool:
    return all(abs(a - b) <= tol for a, b in zip(pixel, expected, strict=True))


class TestScenarioCircleText:
    """A blue circle icon with a white letter."""

    @pytest.fixture
    def image(self) -> Image.Image:
        """Render the icon at 192 px."""
        config = IconConfig(
            source_type="text",
            source_value="A",
            background_type="color",
            background_color="#3B82F6",
            shape="circle",
        )
        return draw_icon(config, 192)

    def test_size(self, image: Image.Image) -> None:
        """Test the canvas matches the requested size."""
        assert image.size == (192, 192)
        assert image.mode == "RGBA"

    def test_corners_transparent(self, image: Image.Image) -> None:
        """Test pixels outside the circle are fully transparent."""
        for corner in ((0, 0), (191, 0), (0, 191), (191, 191)):
            assert image.getpixel(corner)[3] == 0

    def test_center_blends_background_and_white(self, image: Image.Image) -> None:
        """Test the centre is opaque and lies between blue and white."""
        r, g, b, a = image.getpixel((96, 96))
        assert a == 255
        assert r >= BLUE[0] - 2
        assert g >= BLUE[1] - 2
        assert b >= BLUE[2] - 2

    def test_letter_is_white(self, image: Image.Image) -> None:
        """Test the content box contains white text pixels."""
        box = np.asarray(image.crop((48, 48, 144, 144)))
        white = np.all(box[..., :3] >= 245, axis=-1)
        assert white.any()


class TestShapes:
    """Shape masks clip the background and content."""

    def _draw(self, shape: str, size: int = 128) -> Image.Image:
        config = IconConfig(
            source_type="text",
            source_value="",
            background_type="color",
            background_color="#3B82F6",
            shape=shape,  # type: ignore[arg-type]
        )
        return draw_icon(config, size)

    def test_square_is_full(self) -> None:
        """Test the square shape keeps every pixel."""
        image = self._draw("square")
        assert image.getpixel((0, 0)) == BLUE
        assert image.getpixel((127, 127)) == BLUE

    def test_squircle_rounds_corners(self) -> None:
        """Test squircle corners are clear and edge midpoints opaque."""
        image = self._draw("squircle")
        assert image.getpixel((0, 0))[3] == 0
        assert image.getpixel((64, 1))[3] == 255
        assert image.getpixel((1, 64))[3] == 255

    def test_themed_hexagon(self) -> None:
        """Test the hexagon has flat top and bottom edges."""
        image = self._draw("themed")
        assert image.getpixel((64, 2))[3] == 0
        assert image.getpixel((64, 125))[3] == 0
        assert image.getpixel((10, 64))[3] == 255
        assert image.getpixel((64, 64))[3] == 255

    def test_square_mask_is_none(self) -> None:
        """Test the square shape needs no mask."""
        assert shape_mask("square", 32) is None

    def test_circle_mask_inscribed(self) -> None:
        """Test the circle mask touches the edges only at midpoints."""
        mask = shape_mask("circle", 64)
        assert mask is not None
        assert mask.getpixel((0, 0)) == 0
        assert mask.getpixel((32, 32)) == 255


class TestBackgrounds:
    """Background kinds."""

    def test_gradient_deterministic(self) -> None:
        """Test gradients render byte-identical output."""
        config = IconConfig(shape="square", effect="none")
        assert encode_png(draw_icon(config, 64)) == encode_png(draw_icon(config, 64))

    def test_gradient_direction(self) -> None:
        """Test a left-to-right gradient runs from first to last colour."""
        config = IconConfig(
            source_type="text",
            source_value="",
            shape="square",
            gradient=GradientConfig(colors=("#FF0000", "#0000FF"), direction="to-r"),
        )
        image = draw_icon(config, 100)
        assert _close(image.getpixel((0, 50)), (255, 0, 0, 255), tol=5)
        assert _close(image.getpixel((99, 50)), (0, 0, 255, 255), tol=5)

    def test_gradient_axis_fallback(self) -> None:
        """Test unknown directions fall back to top-left to bottom-right."""
        assert gradient_axis("sideways", 10, 10) == gradient_axis("to-br", 10, 10)

    def test_single_stop_gradient_is_solid(self) -> None:
        """Test a one-colour gradient is a flat fill."""
        image = linear_gradient(8, 8, ["#00FF00"], (0, 0), (8, 8))
        assert image.getcolors() == [(64, (0, 255, 0, 255))]

    def test_mesh_blends_corner_glows(self) -> None:
        """Test the second mesh colour glows from the top-right corner."""
        config = IconConfig(
            source_type="text",
            source_value="",
            shape="square",
            background_type="mesh",
            mesh=MeshConfig(colors=("#FF0000", "#0000FF")),
        )
        image = draw_icon(config, 100)
        assert _close(image.getpixel((0, 0)), (255, 0, 0, 255), tol=3)
        r, _g, b, a = image.getpixel((99, 0))
        assert a == 255
        assert r > 100
        assert b > 100
        assert encode_png(image) == encode_png(draw_icon(config, 100))

    def test_texture_noise_within_amplitude(self) -> None:
        """Test texture noise stays within 10 of the base colour."""
        config = IconConfig(
            source_type="text",
            source_value="",
            shape="square",
            background_type="texture",
            background_color="#808080",
        )
        arr = np.asarray(draw_icon(config, 64)).astype(int)
        rgb = arr[..., :3]
        assert rgb.min() >= 0x80 - 10
        assert rgb.max() <= 0x80 + 10
        assert rgb.std() > 0
        assert (arr[..., 3] == 255).all()

    def test_none_background_transparent(self) -> None:
        """Test the none background leaves the canvas clear."""
        config = IconConfig(
            source_type="text", source_value="", background_type="none", shape="square"
        )
        assert draw_icon(config, 16).getbbox() is None

    def test_unparseable_colour_skips_fill(self) -> None:
        """Test a bad colour degrades to a transparent background."""
        config = IconConfig(
            source_type="text",
            source_value="",
            background_type="color",
            background_color="nope",
            shape="square",
        )
        assert draw_icon(config, 16).getbbox() is None

    def test_missing_background_image(self) -> None:
        """Test an undecodable background image is skipped."""
        config = IconConfig(
            source_type="text",
            source_value="",
            background_type="image",
            background_image=b"garbage",
            shape="square",
        )
        assert draw_icon(config, 16).getbbox() is None


class TestContent:
    """Foreground content kinds."""

    def test_glyph_drawn_white(self) -> None:
        """Test the default glyph paints white at the centre."""
        image = draw_icon(IconConfig(shape="square"), 128)
        r, g, b, _a = image.getpixel((64, 64))
        assert min(r, g, b) >= 240

    def test_image_content(self, red_png: bytes) -> None:
        """Test image sources fill the content box."""
        config = IconConfig(
            source_type="image",
            source_value=red_png,
            effect="none",
            background_type="none",
            shape="square",
        )
        # Nothing decoded yet: content is skipped
        assert draw_icon(config, 32, IconImages()).getbbox() is None
        decoded = Image.new("RGBA", (64, 64), (255, 0, 0, 255))
        image = draw_icon(config, 32, IconImages(content=decoded))
        assert image.getpixel((16, 16)) == (255, 0, 0, 255)
        assert image.getpixel((0, 0)) == (255, 0, 0, 255)

    def test_full_padding_is_degenerate_but_valid(self) -> None:
        """Test 100 percent padding renders the background only."""
        config = IconConfig(
            source_type="text",
            source_value="A",
            padding_percent=100,
            background_type="color",
            background_color="#3B82F6",
            shape="square",
        )
        image = draw_icon(config, 64)
        assert image.getcolors() == [(64 * 64, BLUE)]

    def test_zero_padding(self) -> None:
        """Test 0 percent padding still renders."""
        config = IconConfig(padding_percent=0, shape="square")
        assert draw_icon(config, 32).size == (32, 32)

    def test_unknown_glyph_skipped(self) -> None:
        """Test an unregistered glyph name leaves only the background."""
        config = IconConfig(
            source_value="Rocket",
            background_type="color",
            background_color="#3B82F6",
            shape="square",
        )
        assert draw_icon(config, 32).getcolors() == [(32 * 32, BLUE)]

    def test_clipart_renders(self) -> None:
        """Test emoji content renders without error."""
        config = IconConfig(source_type="clipart", source_value="\N{ROCKET}")
        assert draw_icon(config, 64).size == (64, 64)


class TestBadge:
    """Notification badge."""

    def test_badge_position(self) -> None:
        """Test the badge sits in the top-right corner."""
        config = IconConfig(
            source_type="text",
            source_value="",
            background_type="none",
            shape="square",
            has_badge=True,
            badge_color="#FF0000",
        )
        image = draw_icon(config, 200)
        assert image.getpixel((165, 35)) == (255, 0, 0, 255)
        assert image.getpixel((35, 165))[3] == 0

    def test_badge_not_clipped_by_shape(self) -> None:
        """Test the badge is drawn after the mask."""
        config = IconConfig(
            source_type="text",
            source_value="",
            background_type="color",
            background_color="#3B82F6",
            shape="circle",
            has_badge=True,
            badge_color="#FF0000",
        )
        image = draw_icon(config, 200)
        # Outside the circle but inside the badge
        assert image.getpixel((175, 25)) == (255, 0, 0, 255)


class TestMonochrome:
    """Monochrome launcher layer."""

    def test_transparent_background(self) -> None:
        """Test the background is never painted."""
        config = IconConfig(background_type="color", shape="square")
        image = draw_monochrome_icon(config, 64)
        assert image.getpixel((0, 0))[3] == 0

    def test_glyph_is_white(self) -> None:
        """Test content is painted white."""
        image = draw_monochrome_icon(IconConfig(), 128)
        assert image.getpixel((64, 64)) == (255, 255, 255, 255)

    def test_default_padding_without_effect(self) -> None:
        """Test the 15 percent fallback padding when the effect is off."""
        decoded = Image.new("RGBA", (8, 8), (255, 0, 0, 255))
        config = IconConfig(source_type="image", source_value=b"x", effect="none")
        image = draw_monochrome_icon(config, 100, IconImages(content=decoded))
        assert image.getbbox() == (15, 15, 85, 85)
        assert image.getpixel((50, 50)) == (255, 255, 255, 255)


class TestBanner:
    """Banners built from the icon design."""

    def test_horizontal_gradient(self) -> None:
        """Test gradient banners run left to right."""
        config = IconConfig(
            source_type="text",
            source_value="",
            gradient=GradientConfig(colors=("#FF0000", "#0000FF"), direction="to-b"),
        )
        image = draw_banner(config, 320, 180)
        assert image.size == (320, 180)
        assert _close(image.getpixel((0, 90)), (255, 0, 0, 255), tol=5)
        assert _close(image.getpixel((319, 90)), (0, 0, 255, 255), tol=5)
        assert _close(image.getpixel((0, 0)), image.getpixel((0, 179)), tol=0)

    def test_non_gradient_uses_solid_colour(self) -> None:
        """Test mesh and texture designs fall back to the solid colour."""
        config = IconConfig(
            source_type="text",
            source_value="",
            background_type="mesh",
            background_color="#3B82F6",
        )
        image = draw_banner(config, 100, 50)
        assert image.getcolors() == [(100 * 50, BLUE)]

    def test_caption(self) -> None:
        """Test a caption changes the band below the content."""
        config = IconConfig(
            source_type="text",
            source_value="",
            background_type="color",
            background_color="#3B82F6",
        )
        plain = draw_banner(config, 1024, 500)
        captioned = draw_banner(config, 1024, 500, caption="My App")
        band = (0, 400, 1024, 500)
        assert plain.crop(band).getcolors() == [(1024 * 100, BLUE)]
        assert captioned.crop(band).getcolors(maxcolors=1024 * 100) != [(1024 * 100, BLUE)]


class TestAsyncRender:
    """Async entry points."""

    @pytest.mark.asyncio
    async def test_render_icon_png(self, red_png: bytes) -> None:
        """Test PNG bytes come back at the requested size."""
        config = IconConfig(source_type="image", source_value=red_png, shape="square")
        data = await render_icon_png(config, 48, loader=ImageLoader())
        image = open_png(data)
        assert image.size == (48, 48)


class TestLargeCanvases:
    """Big custom sizes stay within working-memory limits."""

    def test_shape_mask_oversampling_capped(self) -> None:
        """Test a large shape mask is not drawn beyond 8192 px per side."""
        sizes: list[tuple[int, int]] = []
        real_new = Image.new

        def recording_new(mode: str, size: tuple[int, int], *args: object) -> Image.Image:
            sizes.append(size)
            return real_new(mode, size, *args)

        with patch("splashcraft.render.Image.new", side_effect=recording_new):
            mask = shape_mask("circle", 6000)
        assert mask is not None
        assert mask.size == (6000, 6000)
        assert max(max(s) for s in sizes) <= 8192
        assert mask.getpixel((0, 0)) == 0
        assert mask.getpixel((3000, 3000)) == 255

    def test_wide_linear_gradient(self) -> None:
        """Test a gradient wider than the compute limit keeps size and end colours."""
        image = linear_gradient(3000, 10, ["#FF0000", "#0000FF"], (0, 5), (3000, 5))
        assert image.size == (3000, 10)
        assert _close(image.getpixel((0, 5)), (255, 0, 0, 255), tol=4)
        assert _close(image.getpixel((2999, 5)), (0, 0, 255, 255), tol=4)

    def test_large_mesh_gradient(self) -> None:
        """Test a mesh larger than the compute limit is upscaled to size."""
        image = mesh_gradient(2048, ["#3B82F6", "#8B5CF6"])
        assert image.size == (2048, 2048)
        assert image.getpixel((1024, 1024))[3] == 255
