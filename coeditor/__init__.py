"""Coeditor: AI-assisted document editing backend and editing core."""

__version__ = "0.1.0"
