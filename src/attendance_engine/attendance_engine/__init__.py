"""Attendance Engine package.

Feature modules (attendance, timecalc, reporting, query) sit on top of small
core/common layers. Flask is only used by the thin controller layer.
"""
