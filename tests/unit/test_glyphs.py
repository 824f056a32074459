"""Unit tests for the glyph registry."""

from unittest.mock import patch

import pytest
from PIL import Image

from splashcraft.const import ICON_LIBRARY
from splashcraft.glyphs import GLYPH_NAMES, GLYPHS, glyph_mask, is_known_glyph


class TestRegistry:
    """Test the closed set of glyph names."""

    def test_default_glyph_registered(self) -> None:
        """Test the default icon glyph exists."""
        assert is_known_glyph("Sparkles")

    def test_names_sorted(self) -> None:
        """Test GLYPH_NAMES lists every glyph in sorted order."""
        assert list(GLYPH_NAMES) == sorted(GLYPHS)

    def test_covers_icon_library(self) -> None:
        """Test every stock icon of the picker has an outline and nothing else does."""
        assert set(GLYPH_NAMES) == set(ICON_LIBRARY)
        assert len(ICON_LIBRARY) == len(set(ICON_LIBRARY))

    def test_unknown_name(self) -> None:
        """Test lookups are case sensitive and closed."""
        assert not is_known_glyph("sparkles")
        assert not is_known_glyph("Spaceship")


class TestGlyphMask:
    """Test glyph rasterization."""

    @pytest.mark.parametrize("name", GLYPH_NAMES)
    def test_every_glyph_has_coverage(self, name: str) -> None:
        """Test each glyph paints something but not the whole square."""
        mask = glyph_mask(name, 64)
        assert mask.mode == "L"
        assert mask.size == (64, 64)
        assert mask.getbbox() is not None
        histogram = mask.histogram()
        assert histogram[0] > 0

    def test_erase_punches_holes(self) -> None:
        """Test the Target glyph alternates filled and cleared rings."""
        mask = glyph_mask("Target", 128)
        # Rings on a 128 px mask: 8..120 filled, 24..104 cleared,
        # 40..88 filled, 54..74 cleared
        assert mask.getpixel((64, 14)) >= 250
        assert mask.getpixel((64, 31)) <= 5
        assert mask.getpixel((64, 47)) >= 250
        assert mask.getpixel((64, 64)) <= 5

    def test_tiny_size(self) -> None:
        """Test a 1 px mask still renders."""
        assert glyph_mask("Heart", 1).size == (1, 1)

    def test_unknown_glyph(self) -> None:
        """Test unknown names raise KeyError."""
        with pytest.raises(KeyError):
            glyph_mask("Spaceship", 32)

    @pytest.mark.parametrize("name", ["Rocket", "Flame", "Coffee", "Globe", "Wifi"])
    def test_picker_glyphs_centre_region(self, name: str) -> None:
        """Test picker glyphs paint inside the design grid, not only at its edge."""
        mask = glyph_mask(name, 128)
        bbox = mask.getbbox()
        assert bbox is not None
        x0, y0, x1, y1 = bbox
        assert x1 - x0 >= 32
        assert y1 - y0 >= 32

    def test_large_mask_is_not_oversampled(self) -> None:
        """Test big glyph masks stay within the oversampling side limit."""
        sizes: list[tuple[int, int]] = []
        real_new = Image.new

        def recording_new(mode: str, size: tuple[int, int], *args: object) -> Image.Image:
            sizes.append(size)
            return real_new(mode, size, *args)

        with patch("splashcraft.glyphs.Image.new", side_effect=recording_new):
            mask = glyph_mask("Star", 6000)
        assert mask.size == (6000, 6000)
        assert max(max(s) for s in sizes) <= 8192
