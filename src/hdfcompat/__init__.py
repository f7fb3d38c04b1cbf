"""
hdfcompat - Normalized views over InSpec compliance results

hdfcompat turns control records from different InSpec output schemas
(exec results and profile views) into one stable view with a deterministic
status, a severity bucket and human-readable finding text. It also parses
NIST SP 800-53 control tags and organizes the control catalog into a
per-family hierarchy for reporting.

Key Features:
    - One status per control, derived by ordered, documented rules
    - Impact to severity bucketing
    - NIST tag parsing, deduplication and numeric-aware sorting
    - NIST family hierarchy built from the static catalog
    - Worst-status roll-up across groups of controls

Design Principles:
    - Pure transformation: no storage, no network
    - Determinism: the same input always yields the same view
"""

__version__ = "0.1.0"

from hdfcompat.config.settings import Settings, load_config

__all__ = [
    "__version__",
    "Settings",
    "load_config",
]
