"""Detector extensions.

This module layers candidate filters and extra profile sources
around a base detector by composition, never by subclassing it.
"""
