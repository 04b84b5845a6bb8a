"""
Configuration management for Gauge.
Loads settings from environment variables and .env file.
"""

import os
from pathlib import Path
from typing import Dict, Optional
from dotenv import load_dotenv

# Load .env file from project root
PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


class Config:
    """Central configuration management."""

    # ==========================================================================
    # Worker Settings
    # ==========================================================================
    TIMING_INTERVAL_NANOS: str = os.getenv("GAUGE_TIMING_INTERVAL_NANOS", "5000")
    GC_BEFORE_EACH: str = os.getenv("GAUGE_GC_BEFORE_EACH", "true")

    # ==========================================================================
    # Trial Settings
    # ==========================================================================
    WARMUP_MEASUREMENTS: int = int(os.getenv("GAUGE_WARMUP_MEASUREMENTS", "10"))
    MEASUREMENTS: int = int(os.getenv("GAUGE_MEASUREMENTS", "9"))
    TRIALS: int = int(os.getenv("GAUGE_TRIALS", "1"))
    SEED: Optional[str] = os.getenv("GAUGE_SEED") or None

    # Output directories
    OUTPUT_DIR: Path = PROJECT_ROOT / os.getenv("OUTPUT_DIR", "output")
    REPORT_DIR: Path = PROJECT_ROOT / os.getenv("REPORT_DIR", "reports")

    # ==========================================================================
    # Results Upload
    # ==========================================================================

    @classmethod
    def get_worker_options(cls) -> Dict[str, str]:
        """Get worker options as the string mapping workers are built from."""
        return {
            "timingIntervalNanos": cls.TIMING_INTERVAL_NANOS,
            "gcBeforeEach": cls.GC_BEFORE_EACH,
        }

    @classmethod
    def get_upload_config(cls) -> Dict[str, str]:
        """Get results uploader configuration."""
        return {
            "url": os.getenv("GAUGE_UPLOAD_URL", ""),
            "key": os.getenv("GAUGE_API_KEY", ""),
        }

    @classmethod
    def ensure_directories(cls):
        """Create output directories if they don't exist."""
        cls.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        cls.REPORT_DIR.mkdir(parents=True, exist_ok=True)
