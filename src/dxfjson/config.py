import json
import logging
from pathlib import Path
from typing import Any

from .models import DuplicatePolicy, ParserConfig

log = logging.getLogger(__name__)


SAMPLE_CONFIG: dict[str, Any] = {
    "DuplicatePolicy": "last",
    "FloatPrecision": 9,
    "Indent": 2,
    "Encoding": "utf-8",
    "ReportUnsupported": True,
}


class ConfigurationHandler:
    """Loads conversion options from a JSON configuration file.

    Values that cannot be used are logged and replaced by their default.
    """

    def __init__(self, config_path: Path) -> None:
        """Initialize configuration handler.

        Parameters
        ----------
        config_path : Path
            Path to JSON configuration file
        """
        self.config_path = config_path
        self.config = ParserConfig()

    def _create_duplicate_policy(self, value: Any) -> DuplicatePolicy:
        for policy in DuplicatePolicy:
            if isinstance(value, str) and policy.value == value.lower():
                return policy
        log.warning(f"Unknown duplicate policy: {value}, defaulting to 'last'")
        return DuplicatePolicy.LAST_WINS

    def _create_precision(self, value: Any) -> int:
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 17:
            return value
        log.warning(f"Invalid float precision: {value}, defaulting to 9")
        return 9

    def _create_indent(self, value: Any) -> int | None:
        if value is None:
            return None
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return value
        log.warning(f"Invalid indent: {value}, defaulting to 2")
        return 2

    def _create_encoding(self, value: Any) -> str:
        if isinstance(value, str) and len(value) > 0:
            return value
        log.warning(f"Invalid encoding: {value}, defaulting to 'utf-8'")
        return "utf-8"

    def _create_report_unsupported(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        log.warning(f"Invalid ReportUnsupported value: {value}, defaulting to True")
        return True

    def create_config(self, config_data: dict[str, Any]) -> ParserConfig:
        """Create parser options from configuration data.

        Parameters
        ----------
        config_data : dict[str, Any]
            Parsed JSON configuration

        Returns
        -------
        ParserConfig
            Options with defaults for missing keys
        """
        defaults = ParserConfig()
        return ParserConfig(
            duplicate_policy=self._create_duplicate_policy(
                config_data.get("DuplicatePolicy", defaults.duplicate_policy.value)
            ),
            float_precision=self._create_precision(config_data.get("FloatPrecision", defaults.float_precision)),
            indent=self._create_indent(config_data.get("Indent", defaults.indent)),
            encoding=self._create_encoding(config_data.get("Encoding", defaults.encoding)),
            report_unsupported=self._create_report_unsupported(
                config_data.get("ReportUnsupported", defaults.report_unsupported)
            ),
        )

    def load_config(self) -> ParserConfig:
        """Load conversion options from the JSON file.

        Expected JSON format:
        {
            "DuplicatePolicy": "last",
            "FloatPrecision": 9,
            "Indent": 2,
            "Encoding": "utf-8",
            "ReportUnsupported": true
        }

        Raises
        ------
        FileNotFoundError
            If configuration file does not exist
        json.JSONDecodeError
            If configuration file is not valid JSON
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, encoding="utf-8") as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(f"Invalid JSON in configuration file: {e}", e.doc, e.pos) from e

        if not isinstance(config_data, dict):
            log.warning(f"Configuration {self.config_path} is not a JSON object, using defaults")
            config_data = {}
        self.config = self.create_config(config_data)
        return self.config
