"""
Settlement helpers for the LoanLink payment coordinator
"""

from .settings import SettlementSettings, settlement_settings
from .amounts import parse_amount, to_minor_units, from_minor_units
from .tracking import TRACKING_CODE_PATTERN, generate_tracking_code, is_tracking_code

__all__ = [
    # Settings
    "SettlementSettings",
    "settlement_settings",
    # Amounts
    "parse_amount",
    "to_minor_units",
    "from_minor_units",
    # Tracking
    "TRACKING_CODE_PATTERN",
    "generate_tracking_code",
    "is_tracking_code",
]
