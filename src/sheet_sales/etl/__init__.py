"""Low-level parsing for published-sheet exports.

- parsing: quote-aware line splitting and tolerant field normalizers
- column_mapping: keyword-based header -> canonical field mapping
- utils: calendar-day helpers and date presets
"""
