"""
Core arithmetic substrate, result models, and serialization contracts.

Everything here is independent of how results are presented to a user.
"""
