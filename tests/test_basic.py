"""Basic unit tests for maptool modules."""

import io
import logging
from pathlib import Path


class TestSettingsInitialization:
    """Test settings initialization and basic operations."""

    def test_tool_settings_init(self, project: Path) -> None:
        """Test ToolSettings can be initialized."""
        from maptool.settings import ToolSettings

        settings_obj = ToolSettings(project)
        assert settings_obj is not None
        assert settings_obj.get_settings_file_path().endswith("maptool.ini")

    def test_tool_settings_validation(self, project: Path) -> None:
        """Test settings validation returns result."""
        from maptool.settings import ToolSettings

        validation = ToolSettings(project).validate()
        assert validation is not None
        assert validation.is_valid


class TestErrors:
    """Test the error hierarchy."""

    def test_pipeline_errors_share_base(self) -> None:
        """Test every pipeline error is a MapToolError."""
        from maptool import BuildError, LoadError, MapToolError, MissingAssetError

        for error in (
            MissingAssetError("castle", ["castle_blank.png"]),
            LoadError("castle.tmx", "invalid XML"),
            BuildError("castle", "no layers"),
        ):
            assert isinstance(error, MapToolError)

    def test_missing_asset_message(self) -> None:
        """Test the message names the map and every missing file."""
        from maptool import MissingAssetError

        error = MissingAssetError("castle", ["castle.png", "castle_blank.png"])
        assert str(error) == (
            "Could not find required image(s) for map 'castle': castle.png, castle_blank.png"
        )


class TestUtilsLogging:
    """Test logging configuration."""

    def test_logging_setup_with_settings(self, project: Path) -> None:
        """Test logging setup works with settings."""
        from maptool.settings import ToolSettings
        from maptool.utils.logging_config import setup_logging

        setup_logging(settings=ToolSettings(project))

        logger = logging.getLogger("maptool")
        assert logger.level == logging.DEBUG

    def test_console_goes_to_given_stream(self) -> None:
        """Test console output uses the stream passed in, without colours."""
        from maptool.utils.logging_config import setup_logging

        stream = io.StringIO()
        setup_logging(stream=stream)
        logging.getLogger("maptool.test").info("hello")

        assert "INFO" in stream.getvalue()
        assert "hello" in stream.getvalue()
        assert "\033[" not in stream.getvalue()

    def test_file_logging(self, project: Path) -> None:
        """Test CSV file logging when enabled in the settings file."""
        from maptool.settings import ToolSettings
        from maptool.utils.logging_config import setup_logging

        (project / "maptool.ini").write_text("[logging]\nfile_enabled=true\n", encoding="utf-8")
        settings = ToolSettings(project)
        setup_logging(settings=settings)
        logging.getLogger("maptool.test").warning('say "hi"')
        for handler in logging.getLogger().handlers:
            handler.flush()
            if isinstance(handler, logging.FileHandler):
                handler.close()

        content = settings.log_file_path.read_text(encoding="utf-8")
        assert '"maptool.test"' in content
        assert '"say ""hi"""' in content
