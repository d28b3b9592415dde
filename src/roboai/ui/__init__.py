"""Gradio user interface for Robo AI Story Creator."""
