"""Absence Calendar package.

Attendance reconciliation and calendar aggregation for the HRMS, organized by
feature modules (attendance, leaves, holidays, calendar, ...) with a thin Flask
controller layer over service/repository layers.
"""
