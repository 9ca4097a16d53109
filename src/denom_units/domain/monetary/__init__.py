"""Monetary domain package.

This package contains denomination names, the denomination registry, and the
Coin / DecCoin amount types used by conversion and parsing.
"""
