"""Shared constants for the seating service and its client."""

ROLE_STUDENT = "student"
ROLE_STAFF = "staff"
ROLES = (ROLE_STUDENT, ROLE_STAFF)

GENDER_MALE = "male"
GENDER_FEMALE = "female"

# Reference poll cadence for the admin attendance feed (seconds)
ATTENDANCE_POLL_INTERVAL_SECONDS = 8.0

# Attendance rows shown in the admin detail panel
RECENT_ATTENDANCE_LIMIT = 6

MISSING_LOGIN_FIELDS_MESSAGE = "email, password (DOB) and role are required"
INVALID_ROLE_MESSAGE = 'role must be "student" or "staff"'
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
UNPAID_FEE_MESSAGE = "Pay the bus fees to access seat"
