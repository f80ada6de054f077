"""Shared test doubles for the BandVault test suite."""
