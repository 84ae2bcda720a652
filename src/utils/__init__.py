"""
Utility modules for the support bot
"""
from .bot_config_loader import BotConfig, load_bot_config

__all__ = [
    'BotConfig',
    'load_bot_config',
]
