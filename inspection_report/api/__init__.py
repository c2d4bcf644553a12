"""
inspection_report/api package marker.
"""
