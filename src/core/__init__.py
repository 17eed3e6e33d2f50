"""
Core arithmetic capability engine, domain models, and contracts.

This package is independent of any concrete numeric library: operations are
discovered on the numeric type chosen by the caller.
"""
