"""Character n-gram extraction.

This module turns raw text into normalized, rank-ordered n-gram vectors.
It is shared by offline training and runtime detection.
"""
