"""
utils package
-------------

Shared helpers: configuration constants loaded from config/constants.json and logging setup.
"""
