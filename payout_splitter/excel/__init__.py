"""Workbook decoding into string matrices."""
