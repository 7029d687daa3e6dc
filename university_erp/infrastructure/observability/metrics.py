"""Prometheus metrics for business activity and request latency"""

from prometheus_client import Counter, Histogram

# Payroll
salary_processed_counter = Counter(
    "university_salary_processed_total",
    "Salary processing records created",
)

salary_status_counter = Counter(
    "university_salary_status_total",
    "Salary processing status transitions",
    ["status"],  # processed | approved | rejected | paid
)

# Library
library_borrowing_counter = Counter(
    "university_library_borrowings_total",
    "Library circulation actions",
    ["action"],  # borrow | return | renew
)

library_fines_counter = Counter(
    "university_library_fines_total",
    "Sum of overdue fines assessed on returned books",
)

# Certification
certificates_issued_counter = Counter(
    "university_certificates_issued_total",
    "Certificates generated from approved requests",
)

# Finance
payments_counter = Counter(
    "university_payments_total",
    "Fee payments recorded",
    ["method"],
)

# Admissions
admission_applications_counter = Counter(
    "university_admission_applications_total",
    "Admission applications submitted",
)

# Attendance
attendance_marks_counter = Counter(
    "university_attendance_marks_total",
    "Attendance marks recorded",
    ["status"],  # present | absent | late | excused
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_borrowing_action(action: str, fine_amount: int = 0) -> None:
    """Record circulation metrics, including any fine charged on return"""
    library_borrowing_counter.labels(action=action).inc()
    if fine_amount > 0:
        library_fines_counter.inc(fine_amount)


def record_salary_status(status: str) -> None:
    salary_status_counter.labels(status=status).inc()
