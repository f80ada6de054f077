"""
BandVault

Secure, tenant-scoped access to band chart and audio files.
"""

__version__ = "1.0.0"
