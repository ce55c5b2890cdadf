"""Teacher Attendance package.

This package is organized by feature modules (teachers, students, classes,
attendance, payments, reports, admins, web_sessions) with a thin Flask
controller layer over service/repository layers.
"""
