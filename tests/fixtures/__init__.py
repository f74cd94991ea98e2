"""Test fixtures package."""
