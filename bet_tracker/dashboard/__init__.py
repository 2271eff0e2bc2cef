"""Terminal output."""
from .terminal import print_summary, render_summary

__all__ = ["print_summary", "render_summary"]
