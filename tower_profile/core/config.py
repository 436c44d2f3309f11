from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import os

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

class EngineSettings(BaseSettings):
    reference_tables_path: Optional[str] = None  # Falls back to the packaged tables
    log_level: str = "INFO"
    json_logs: bool = True

    model_config = SettingsConfigDict(env_prefix='TOWER_')

# Instantiate settings
engine_settings = EngineSettings()
