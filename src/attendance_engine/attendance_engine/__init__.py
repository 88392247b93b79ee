"""Attendance Engine package.

Feature modules (attendance, absence, missed_clockout, overtime, cleanup, ...)
decide attendance statuses; a thin Flask controller layer exposes them and
repository protocols keep the services independent of MySQL.
"""
