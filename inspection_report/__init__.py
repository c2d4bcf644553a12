"""
inspection_report package marker.

Reconciles tobacco-law inspection spreadsheets submitted by several
inspectors into one facility summary and regenerates the report workbook.
"""
