"""
Core rule model, validators, and validation engine.
"""
