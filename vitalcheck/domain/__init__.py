"""Domain models for vital-sign observations.

Plain value types with no knowledge of rendering, storage or transport.
"""
