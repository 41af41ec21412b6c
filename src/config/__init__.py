"""
Configuration module for the crew billing system.
"""
from .settings import (
    CrewBillingConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'CrewBillingConfig',
    'get_config',
    'load_config',
    'reload_config'
]
