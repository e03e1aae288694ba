"""Persistence helpers."""

from .json_file import load_json_document, save_json_document

__all__ = ["load_json_document", "save_json_document"]
