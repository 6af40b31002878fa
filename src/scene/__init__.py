"""Metaball scene generation."""
