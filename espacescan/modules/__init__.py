"""
Raw accessor modules for the eSpace explorer API.

Each module wraps one group of endpoints and returns the decoded `result`
payload without formatting. They share one ESpaceApi transport.

Usage:
    from espacescan.api import ESpaceApi
    from espacescan.modules import AccountModule
    balance = await AccountModule(ESpaceApi()).get_balance(address)
"""

from espacescan.modules.account import AccountModule
from espacescan.modules.contract import ContractModule
from espacescan.modules.stats import StatsModule, normalize_stats_params
from espacescan.modules.token import TokenModule

__all__ = [
    "AccountModule",
    "ContractModule",
    "StatsModule",
    "TokenModule",
    "normalize_stats_params",
]
