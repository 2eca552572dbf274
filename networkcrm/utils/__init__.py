"""
Utility Modules

Configuration loading and clock utilities.
"""

from networkcrm.utils.config import load_config, Config
from networkcrm.utils.clock import Clock, SystemClock, FixedClock, TimeWindow

__all__ = ["load_config", "Config", "Clock", "SystemClock", "FixedClock", "TimeWindow"]
