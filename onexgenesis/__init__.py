# MIT License
# Copyright (c) 2025 Hashborn

"""
onexgenesis - converts a provider chain's bonded stake snapshot into the
accounts and balances of a consumer chain genesis.
"""

__version__ = "1.0.1"
