"""Configuration package."""
from pumpswitch.config.config import PumpConfig, build_arg_parser, config_from_args, config_from_namespace

__all__ = [
    'PumpConfig',
    'build_arg_parser',
    'config_from_args',
    'config_from_namespace',
]
