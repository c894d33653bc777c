"""
Services package for QRES.

Configuration loading and logging setup for applications embedding the engine.
"""
