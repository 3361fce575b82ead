"""Youth Attendance package.

This package is organized by feature modules (groups, ingestion, sessions,
reports, exports, store) with a thin Flask controller layer on top of a pure,
snapshot-based core.
"""
