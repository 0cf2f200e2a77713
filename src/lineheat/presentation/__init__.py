"""Presentation layer: transport facade, CLI and pytest plugin."""
