"""Configuration management for the Excel documentation toolkit."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Report constants
EMPTY_PLACEHOLDER = "(empty/null)"
TRUNCATION_MARKER = "..."
NULL_LITERAL = "null"

# Default report file suffixes by output format
REPORT_SUFFIXES = {
    "markdown": ".md",
    "json": ".json",
}

SUPPORTED_WORKBOOK_SUFFIXES = [".xlsx", ".xlsm"]
SUPPORTED_TABULAR_SUFFIXES = SUPPORTED_WORKBOOK_SUFFIXES + [".csv"]


class Config(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # System Configuration
    log_level: str = Field(default="INFO")
    temp_dir: str = Field(default="./tmp")
    output_dir: str = Field(default="./reports")
    max_file_size_mb: int = Field(default=100, gt=0)

    # Agent Configuration
    agent_timeout_seconds: int = Field(default=300, gt=0)

    # Column profiling
    sample_window_size: int = Field(default=100, gt=0)
    type_vote_size: int = Field(default=10, gt=0)
    max_sample_values: int = Field(default=2, gt=0)
    max_sample_length: int = Field(default=25, gt=3)
    error_empty_percent: int = Field(default=50, gt=0, le=100)

    # Table discovery
    include_sheet_ranges: bool = Field(default=True)

    # Formula scanning limits
    max_formula_scan_rows: int = Field(default=1000, gt=0)
    max_formula_scan_columns: int = Field(default=100, gt=0)
    max_formulas: int = Field(default=500, gt=0)

    def get_profiling_params(self):
        """Get the keyword arguments shared by the column profiler."""
        return {
            'sample_size': self.sample_window_size,
            'vote_size': self.type_vote_size,
            'max_samples': self.max_sample_values,
            'max_len': self.max_sample_length,
            'error_threshold': self.error_empty_percent,
        }


# Global configuration instance - use lazy initialization to avoid circular imports
_config_instance: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance with lazy initialization."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next call re-reads the environment."""
    global _config_instance
    _config_instance = None
