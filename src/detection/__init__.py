"""Language detection engine.

This module scores query n-gram vectors against a profile store
and turns rank distances into ranked, confidence-tagged results.
"""
