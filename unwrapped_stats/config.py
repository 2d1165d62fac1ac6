"""Application configuration and environment settings"""
from datetime import timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    # Input/Output directories with defaults
    INPUT_DIR: str = Field("/input", description="Streaming history JSON file or directory of files")
    OUTPUT_DIR: str = Field("/output", description="Directory for output files")
    OUTPUT_FILENAME: str = Field("summary.json", description="Name of the summary file written to OUTPUT_DIR")

    # Reporting options
    YEAR: str = Field("all", description="Year to report on, or 'all' for the full history")
    TIMEZONE: str = Field("UTC", description="Zone used for hour/day/month buckets ('local' = host zone)")
    LOG_LEVEL: str = Field("INFO", description="Root logging level")

    @property
    def tzinfo(self) -> Optional[tzinfo]:
        """Resolve TIMEZONE; None stands for the host's local zone"""
        return resolve_timezone(self.TIMEZONE)

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True
    )

def resolve_timezone(name: str) -> Optional[tzinfo]:
    """Map a zone name to a tzinfo ('UTC', 'local' or an IANA name)"""
    if not name or name.upper() == "UTC":
        return timezone.utc
    if name.lower() == "local":
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown time zone: {name}") from e

settings = Settings()

# Constants
SKIP_THRESHOLD_MS = 30_000  # plays shorter than 30s count as skips
TOP_N = 20
MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000
ALL_TIME = "all"
