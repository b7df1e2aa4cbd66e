"""Gradio user interface for the Photo Studio."""
