"""Unit tests for project document validation."""

import pytest

from splashcraft.const import ICON_LIBRARY
from splashcraft.exceptions import InvalidProjectError
from splashcraft.models import GenerationRequest, IconConfig
from splashcraft.schema import (
    android_studio_from_dict,
    extended_from_dict,
    icon_config_from_dict,
    request_from_dict,
    splash_config_from_dict,
)


class TestDefaults:
    """Empty documents fill in the designer defaults."""

    def test_empty_project(self) -> None:
        """Test an empty document matches the model defaults."""
        assert request_from_dict({}) == GenerationRequest()

    def test_empty_icon(self) -> None:
        """Test an empty icon matches IconConfig()."""
        assert icon_config_from_dict({}) == IconConfig()

    def test_nested_gradient_defaults(self) -> None:
        """Test a partial gradient keeps the default direction."""
        icon = icon_config_from_dict({"gradient": {"colors": ["#000000", "#FFFFFF"]}})
        assert icon.gradient.colors == ("#000000", "#FFFFFF")
        assert icon.gradient.direction == "to-br"

    def test_splash_gradient_default_direction(self) -> None:
        """Test splash gradients default to top-to-bottom."""
        assert splash_config_from_dict({}).gradient.direction == "to-b"


class TestIcon:
    """Icon section."""

    def test_camel_case_mapping(self) -> None:
        """Test designer keys map onto model fields."""
        icon = icon_config_from_dict(
            {
                "sourceType": "text",
                "sourceValue": "AB",
                "backgroundType": "mesh",
                "meshGradient": {"colors": ["#FF0000"]},
                "shape": "themed",
                "hasBadge": True,
                "badgeColor": "#00FF00",
                "filename": "app_icon",
                "adaptiveIcon": {"enabled": True, "backgroundColor": "#101010"},
            }
        )
        assert icon.source_type == "text"
        assert icon.source_value == "AB"
        assert icon.mesh.colors == ("#FF0000",)
        assert icon.shape == "themed"
        assert icon.has_badge
        assert icon.output_filename == "app_icon"
        assert icon.adaptive.enabled
        assert icon.icon_background_color == "#101010"

    @pytest.mark.parametrize(("given", "expected"), [(-10, 0.0), (250, 100.0), ("30", 30.0)])
    def test_padding_clamped(self, given: object, expected: float) -> None:
        """Test padding percentages are coerced and clamped."""
        assert icon_config_from_dict({"paddingPercent": given}).padding_percent == expected

    def test_unknown_glyph_rejected(self) -> None:
        """Test icon sources must name a registered glyph."""
        with pytest.raises(InvalidProjectError, match="unknown glyph"):
            icon_config_from_dict({"sourceType": "icon", "sourceValue": "Spaceship"})

    @pytest.mark.parametrize("name", ICON_LIBRARY)
    def test_icon_library_names_accepted(self, name: str) -> None:
        """Test every stock picker icon is a valid icon source."""
        request = request_from_dict({"icon": {"sourceType": "icon", "sourceValue": name}})
        assert request.icon.source_value == name

    def test_glyph_check_only_for_icon_sources(self) -> None:
        """Test text sources accept any string."""
        icon = icon_config_from_dict({"sourceType": "text", "sourceValue": "Rocket"})
        assert icon.source_value == "Rocket"

    def test_bad_colour(self) -> None:
        """Test colours must be hex."""
        with pytest.raises(InvalidProjectError, match="hex colour"):
            icon_config_from_dict({"backgroundColor": "blue"})

    def test_bad_filename(self) -> None:
        """Test filenames must be Android resource names."""
        with pytest.raises(InvalidProjectError):
            icon_config_from_dict({"filename": "My Icon"})

    def test_empty_filename_defaults(self) -> None:
        """Test an empty filename means ic_launcher."""
        assert icon_config_from_dict({"filename": ""}).filename == "ic_launcher"

    @pytest.mark.parametrize(
        ("key", "value"),
        [("shape", "star"), ("backgroundType", "video"), ("effect", "shadow")],
    )
    def test_enumerations(self, key: str, value: str) -> None:
        """Test enumerated fields reject unknown values."""
        with pytest.raises(InvalidProjectError):
            icon_config_from_dict({key: value})

    def test_unknown_key_rejected(self) -> None:
        """Test misspelled keys are reported instead of ignored."""
        with pytest.raises(InvalidProjectError, match="backgroundColour"):
            icon_config_from_dict({"backgroundColour": "#FFFFFF"})


class TestAndroidStudio:
    """Android Studio options."""

    def test_toggles(self) -> None:
        """Test toggles map onto the options."""
        opts = android_studio_from_dict({"enabled": True, "generateMonochrome": False})
        assert opts.enabled
        assert not opts.generate_monochrome
        assert opts.generate_round_icon


class TestExtended:
    """Extended formats and custom sizes."""

    def test_custom_sizes(self) -> None:
        """Test custom sizes become CustomIconSize rows."""
        ext = extended_from_dict(
            {
                "web": True,
                "customSizes": [
                    {"name": "promo", "width": 800, "height": 800},
                    {"id": "x", "name": "wide", "width": "640", "height": 360},
                ],
            }
        )
        assert ext.web
        promo, wide = ext.custom_sizes
        assert promo.id == "promo"
        assert promo.is_square
        assert wide.id == "x"
        assert (wide.width, wide.height) == (640, 360)

    @pytest.mark.parametrize("width", [0, 8193, -1])
    def test_custom_size_bounds(self, width: int) -> None:
        """Test custom sizes must be between 1 and 8192 px."""
        with pytest.raises(InvalidProjectError):
            extended_from_dict({"customSizes": [{"name": "a", "width": width, "height": 10}]})

    def test_custom_size_name_is_not_a_path(self) -> None:
        """Test custom names cannot escape the custom folder."""
        with pytest.raises(InvalidProjectError):
            extended_from_dict(
                {"customSizes": [{"name": "../evil", "width": 10, "height": 10}]}
            )

    def test_duplicate_enabled_names(self) -> None:
        """Test two enabled sizes cannot share a name."""
        sizes = [
            {"name": "promo", "width": 10, "height": 10},
            {"name": "promo", "width": 20, "height": 20},
        ]
        with pytest.raises(InvalidProjectError, match="duplicate custom size"):
            extended_from_dict({"customSizes": sizes})

    def test_duplicate_disabled_name_allowed(self) -> None:
        """Test a disabled duplicate does not clash."""
        sizes = [
            {"name": "promo", "width": 10, "height": 10},
            {"name": "promo", "width": 20, "height": 20, "enabled": False},
        ]
        assert len(extended_from_dict({"customSizes": sizes}).custom_sizes) == 2


class TestProject:
    """Whole-document validation."""

    def test_platforms_deduplicated(self) -> None:
        """Test repeated platform tokens collapse in order."""
        request = request_from_dict({"platforms": ["ios", "android", "ios"]})
        assert request.platforms == ("ios", "android")

    def test_unknown_platform(self) -> None:
        """Test platform tokens are a closed set."""
        with pytest.raises(InvalidProjectError):
            request_from_dict({"platforms": ["android", "windows"]})

    def test_error_is_value_error(self) -> None:
        """Test callers can catch schema errors as ValueError."""
        with pytest.raises(ValueError, match="Invalid project"):
            request_from_dict({"splash": {"position": "left"}})
