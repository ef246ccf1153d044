"""Relative paths of the booking/testing service endpoints.

Paths are relative to the configured ``base_url`` and keep the
service's trailing slashes.
"""

REGISTER = "user/register/"
LOGIN = "user/login/"
TOKEN_REFRESH = "user/token/refresh/"
USER = "user/user/"
USERS = "user/users/"
CENTERS = "api/centers/"
SECTIONS = "api/sections/"
CATEGORIES = "api/categories/"
SUBSCRIPTIONS = "api/subscriptions/"
SCHEDULES = "api/schedules/"
RECORDS = "api/records/"
FEEDBACKS = "api/feedbacks/"
CONFIRM_ATTENDANCE = "api/records/confirm_attendance/"
CANCEL_RESERVATION = "api/records/cancel_reservation/"
SUBMIT_TEST = "api/submit_test/"
# Syllabuses for a section.
GET_SYLLABUSES = "api/get_tests/"
GET_TEST_BY_ID = "api/get_test/"

ENDPOINTS: dict[str, str] = {
    name: value
    for name, value in globals().items()
    if name.isupper() and isinstance(value, str)
}
