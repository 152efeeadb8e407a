"""Presentation layer: Decoratable base class, engine and pytest plugin."""
