"""Photo Attendance package.

Organized by feature modules (users, roles, attendance, checkin, ...) with a
thin Flask controller layer over service/repository layers. Camera capture and
object storage sit in their own modules so the check-in pipeline only sees
their interfaces.
"""
