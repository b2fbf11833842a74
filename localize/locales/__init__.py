"""Locale package for bundled JSON translation resources.

This package contains translation files named ``<lang>[-<country>-<variant>].json``
(e.g. en.json, ar.json) that are read via importlib.resources. Keeping this as a
real package ensures the resources are discoverable both locally and when installed.
"""
