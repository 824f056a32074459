"""Unit tests for the command line entry point."""

import json
import logging
import zipfile
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from splashcraft.cli import load_project, main, resolve_image_paths
from splashcraft.exceptions import AssetEncodeError, InvalidProjectError
from splashcraft.models import GeneratedAsset, GenerationRequest

ASSETS = [
    GeneratedAsset("ic_launcher.png", "android/icons/mipmap-mdpi/ic_launcher.png", b"x"),
    GeneratedAsset("Icon-20@1x.png", "ios/icons/Icon-20@1x.png", b"yy"),
]


def _write_project(directory: Path, project: dict) -> Path:
    path = directory / "project.json"
    path.write_text(json.dumps(project), encoding="utf-8")
    return path


class TestImagePaths:
    """Relative image references."""

    def test_relative_paths_inlined(self, tmp_path: Path, red_png: bytes) -> None:
        """Test image fields pointing at files are replaced by their bytes."""
        (tmp_path / "logo.png").write_bytes(red_png)
        project = {
            "icon": {"sourceType": "image", "sourceValue": "logo.png"},
            "splash": {"logoImage": "logo.png"},
        }
        resolved = resolve_image_paths(project, tmp_path)
        assert resolved["icon"]["sourceValue"] == red_png
        assert resolved["splash"]["logoImage"] == red_png
        assert project["splash"]["logoImage"] == "logo.png"

    def test_text_sources_untouched(self, tmp_path: Path) -> None:
        """Test non-image sources are not treated as paths."""
        project = {"icon": {"sourceType": "text", "sourceValue": "logo.png"}}
        assert resolve_image_paths(project, tmp_path) == project

    def test_data_urls_untouched(self, tmp_path: Path) -> None:
        """Test data URLs pass through."""
        project = {"splash": {"backgroundImage": "data:image/png;base64,AAAA"}}
        assert resolve_image_paths(project, tmp_path) == project

    def test_missing_file_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test an unreadable file is logged and dropped."""
        with caplog.at_level(logging.WARNING):
            resolved = resolve_image_paths(
                {"icon": {"adaptiveIcon": {"foregroundImage": "gone.png"}}}, tmp_path
            )
        assert resolved["icon"]["adaptiveIcon"]["foregroundImage"] is None
        assert "gone.png" in caplog.text


class TestLoadProject:
    """Project file reading."""

    def test_bad_json(self, tmp_path: Path) -> None:
        """Test malformed JSON is an invalid project."""
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(InvalidProjectError):
            load_project(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        """Test the top level must be an object."""
        path = _write_project(tmp_path, [])  # type: ignore[arg-type]
        with pytest.raises(InvalidProjectError, match="JSON object"):
            load_project(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing project file is an invalid project."""
        with pytest.raises(InvalidProjectError):
            load_project(tmp_path / "nope.json")


class TestMain:
    """Exit codes and output."""

    def test_success(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test a run writes the archive and prints the summary and next steps."""
        project = _write_project(tmp_path, {"platforms": ["android", "ios"]})
        output = tmp_path / "dist" / "assets.zip"
        mock_generate = AsyncMock(return_value=ASSETS)
        with patch("splashcraft.cli.generate_assets", mock_generate):
            code = main([str(project), "-o", str(output), "--framework", "flutter"])
        assert code == 0
        request = mock_generate.await_args.args[0]
        assert isinstance(request, GenerationRequest)
        assert request.platforms == ("android", "ios")
        with zipfile.ZipFile(output) as archive:
            assert archive.namelist() == [a.path for a in ASSETS]
        out = capsys.readouterr().out
        assert "Wrote 2 assets (3 bytes)" in out
        assert "android_icons: 1" in out
        assert "Next steps for Flutter" in out
        assert "flutter_native_splash" in out

    def test_invalid_project(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test schema errors exit with 1 and no archive."""
        project = _write_project(tmp_path, {"platforms": ["windows"]})
        output = tmp_path / "assets.zip"
        assert main([str(project), "-o", str(output)]) == 1
        assert not output.exists()
        assert "error: Invalid project" in capsys.readouterr().err

    def test_generation_failure(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test a fatal generation error exits with 2."""
        project = _write_project(tmp_path, {})
        output = tmp_path / "assets.zip"
        failing = AsyncMock(side_effect=AssetEncodeError("ios/icons/Icon-20@1x.png", "boom"))
        with patch("splashcraft.cli.generate_assets", failing):
            assert main([str(project), "-o", str(output)]) == 2
        assert not output.exists()
        assert "Icon-20@1x.png" in capsys.readouterr().err

    def test_unknown_framework_rejected(self, tmp_path: Path) -> None:
        """Test argparse rejects frameworks without a guide."""
        project = _write_project(tmp_path, {})
        with pytest.raises(SystemExit):
            main([str(project), "--framework", "xamarin"])
