"""shiftdesk package.

Attendance shift tracking, leave requests and hierarchy notifications,
organized by feature modules (users, attendance, leaves, notifications)
with a thin Flask controller layer over async service/repository layers.
"""
