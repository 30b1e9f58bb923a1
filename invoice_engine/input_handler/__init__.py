"""
Input Handler Module for the Invoice Field Engine.

This module provides functionality for:
    - Detecting file types (text, PDF, image)
    - Validating input paths
    - Turning documents into plain text

Supported formats:
    - Plain text: TXT
    - Digital PDF (embedded text, via pdfplumber)
    - Images are recognised but need an OCR engine

Author: ML Engineering Team
"""

from .handler import InputHandler, LoadedDocument

__all__ = ['InputHandler', 'LoadedDocument']
