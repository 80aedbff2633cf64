"""
Data models package.
"""
