"""Conversion, normalization and parsing of coins against a `DenomRegistry`."""
