"""Language profiles and profile storage.

This module holds per-language n-gram fingerprints, their JSON Lines
serialization, the read-only store used by detectors, and the offline trainer.
"""
