"""
Test suite for the attendance_report package.
"""
