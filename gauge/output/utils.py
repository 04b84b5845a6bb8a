"""
Utility functions for result output.
Separated to avoid circular imports.
"""

import os
import platform
import socket
import sys
from datetime import datetime
from typing import Dict


def get_machine_info() -> Dict[str, str]:
    """
    Get machine information for report context.

    Returns:
        Dictionary with machine details including:
        - hostname: Machine hostname
        - platform: OS platform info
        - python: Interpreter implementation and version
        - cpu_count: Logical CPUs
    """
    return {
        "hostname": socket.gethostname(),
        "platform": f"{platform.system()} {platform.release()}",
        "machine": platform.machine(),
        "python": f"{platform.python_implementation()} {platform.python_version()}",
        "executable": sys.executable,
        "cpu_count": str(os.cpu_count() or "unknown"),
    }


def get_report_subdir_name() -> str:
    """
    Generate report subdirectory name based on date and hostname.

    Format: YYYYMMDD_hostname
    Example: 20251224_build-01

    Returns:
        Subdirectory name string
    """
    date_str = datetime.now().strftime("%Y%m%d")
    hostname = socket.gethostname().replace("_", "-").replace(os.sep, "-")
    return f"{date_str}_{hostname}"
