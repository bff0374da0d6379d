"""Classroom Attendance package.

This package is organized by feature modules (users, classes, enrollments,
lectures, attendance, stats) with a thin Flask controller layer on top of
service/repository layers.
"""
