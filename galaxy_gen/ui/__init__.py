"""Tk tweak panel."""
