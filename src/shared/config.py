import json
from pathlib import Path
from typing import Dict, Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.const import (
    CONFIG_FILE_NAME,
    DEFAULT_DATABASE_PATH,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PLUGINS_DIR,
    DEFAULT_POSTS_PER_PAGE,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    LIBRARY_LOG_LEVELS,
)


class Config(BaseSettings):
    """Global configuration settings for the Media Library service."""

    database_path: str = DEFAULT_DATABASE_PATH
    plugins_dir: Path = Path(DEFAULT_PLUGINS_DIR)
    server_host: str = DEFAULT_SERVER_HOST
    server_port: int = DEFAULT_SERVER_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    default_posts_per_page: int = DEFAULT_POSTS_PER_PAGE
    library_log_levels: Dict[str, str] = dict(LIBRARY_LOG_LEVELS)

    model_config = SettingsConfigDict(
        env_prefix='MEDIA_LIBRARY_',
    )

    @classmethod
    def load_config_from_json(cls) -> Dict[str, Any]:
        """Load configuration from config.json file."""
        config_path = Path(CONFIG_FILE_NAME)
        if config_path.exists():
            with open(config_path, 'r') as f:
                config = json.load(f)
                if "plugins_dir" in config:
                    config["plugins_dir"] = Path(config["plugins_dir"])
                return config
        return {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """
        Customise the sources for settings.

        Order of precedence (highest to lowest):
        1. Environment variables
        2. Init settings (kwargs passed to constructor)
        3. JSON config file
        4. Default values
        """
        def json_source():
            return cls.load_config_from_json()

        return (
            env_settings,
            init_settings,
            json_source,
        )
