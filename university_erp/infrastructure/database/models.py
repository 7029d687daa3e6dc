"""SQLAlchemy ORM models for the university schema"""

import uuid
from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


# ==================== Identity ====================


class User(TimestampMixin, Base):
    """Login account for any member of the university"""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(String(30), nullable=False, default="student")
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)


# ==================== Academics ====================


class Campus(TimestampMixin, Base):
    __tablename__ = "campuses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    code = Column(String(20), nullable=False, unique=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    province = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class Program(TimestampMixin, Base):
    """Degree program offered by a department"""

    __tablename__ = "programs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(String(20), nullable=False, unique=True)
    name = Column(String(200), nullable=False)
    department = Column(String(200), nullable=True)
    duration_years = Column(Integer, nullable=False, default=4)
    total_credits = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    courses = relationship("Course", back_populates="program")


class Course(TimestampMixin, Base):
    __tablename__ = "courses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(String(20), nullable=False, unique=True)
    title = Column(String(200), nullable=False)
    credit_hours = Column(Integer, nullable=False, default=3)
    program_id = Column(Uuid, ForeignKey("programs.id"), nullable=True, index=True)
    semester = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    program = relationship("Program", back_populates="courses")


class CourseSection(TimestampMixin, Base):
    """Teaching group of a course in one semester"""

    __tablename__ = "course_sections"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    course_id = Column(Uuid, ForeignKey("courses.id"), nullable=False, index=True)
    section_code = Column(String(10), nullable=False)
    semester = Column(String(20), nullable=False)
    faculty_id = Column(Uuid, ForeignKey("employees.id"), nullable=True)
    max_capacity = Column(Integer, nullable=False)
    current_enrollment = Column(Integer, nullable=False, default=0)
    room = Column(String(50), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("course_id", "section_code", "semester", name="uq_sections_course_code_semester"),
        CheckConstraint("max_capacity > 0", name="ck_sections_capacity_positive"),
    )


class AttendanceRecord(TimestampMixin, Base):
    __tablename__ = "attendance_records"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    section_id = Column(Uuid, ForeignKey("course_sections.id"), nullable=False, index=True)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    attendance_date = Column(Date, nullable=False)
    status = Column(String(10), nullable=False)
    marked_by = Column(Uuid, nullable=True)
    remarks = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("section_id", "student_id", "attendance_date", name="uq_attendance_section_student_date"),
    )


class Student(TimestampMixin, Base):
    """Enrolled student"""

    __tablename__ = "students"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=True)
    roll_number = Column(String(50), nullable=False, unique=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    program_id = Column(Uuid, ForeignKey("programs.id"), nullable=True, index=True)
    batch = Column(String(20), nullable=False)
    current_semester = Column(Integer, nullable=False, default=1)
    enrollment_status = Column(String(20), nullable=False, default="active")
    admission_date = Column(Date, nullable=True)
    campus_id = Column(Uuid, ForeignKey("campuses.id"), nullable=True)

    program = relationship("Program")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# ==================== Admissions ====================


class EligibilityCriteria(TimestampMixin, Base):
    __tablename__ = "eligibility_criteria"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    program_id = Column(Uuid, ForeignKey("programs.id"), nullable=False, unique=True)
    minimum_marks = Column(Float, nullable=True)
    minimum_cgpa = Column(Float, nullable=True)
    age_limit = Column(Integer, nullable=True)


class AdmissionApplication(TimestampMixin, Base):
    """Applicant's request for a seat in a program"""

    __tablename__ = "admission_applications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    application_number = Column(String(30), nullable=False, unique=True)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    program_id = Column(Uuid, ForeignKey("programs.id"), nullable=False, index=True)
    batch = Column(String(20), nullable=True)
    semester = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False, default="submitted")
    eligibility_status = Column(String(20), nullable=True)
    eligibility_score = Column(Float, nullable=True)
    merit_rank = Column(Integer, nullable=True)
    application_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    reviewed_by = Column(Uuid, nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    remarks = Column(Text, nullable=True)


# ==================== Examinations ====================


class Exam(TimestampMixin, Base):
    __tablename__ = "exams"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    exam_type = Column(String(20), nullable=False)
    course_id = Column(Uuid, ForeignKey("courses.id"), nullable=True, index=True)
    semester = Column(String(20), nullable=True)
    exam_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    total_marks = Column(Float, nullable=False)
    passing_marks = Column(Float, nullable=True)
    venue = Column(String(200), nullable=True)


class Result(TimestampMixin, Base):
    """A student's marks in one exam"""

    __tablename__ = "results"
    __table_args__ = (UniqueConstraint("exam_id", "student_id", name="uq_results_exam_student"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    exam_id = Column(Uuid, ForeignKey("exams.id"), nullable=False, index=True)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    obtained_marks = Column(Float, nullable=False)
    total_marks = Column(Float, nullable=False)
    percentage = Column(Float, nullable=False)
    grade = Column(String(5), nullable=False)
    gpa = Column(Float, nullable=False)
    is_pass = Column(Boolean, nullable=False, default=False)
    is_approved = Column(Boolean, nullable=False, default=False)
    entered_by = Column(Uuid, nullable=True)
    approved_by = Column(Uuid, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    remarks = Column(Text, nullable=True)

    grade_changes = relationship("GradeChange", back_populates="result", cascade="all, delete-orphan")


class GradeChange(Base):
    """Audit trail entry written on every result update"""

    __tablename__ = "grade_changes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    result_id = Column(Uuid, ForeignKey("results.id", ondelete="CASCADE"), nullable=False, index=True)
    previous_marks = Column(Float, nullable=False)
    new_marks = Column(Float, nullable=False)
    previous_grade = Column(String(5), nullable=False)
    new_grade = Column(String(5), nullable=False)
    reason = Column(Text, nullable=True)
    changed_by = Column(Uuid, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    result = relationship("Result", back_populates="grade_changes")


class ReEvaluation(TimestampMixin, Base):
    __tablename__ = "re_evaluations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    result_id = Column(Uuid, ForeignKey("results.id"), nullable=False, index=True)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    revised_marks = Column(Float, nullable=True)
    remarks = Column(Text, nullable=True)
    decided_by = Column(Uuid, nullable=True)
    decided_at = Column(DateTime(timezone=True), nullable=True)


# ==================== Finance ====================


class FeeStructure(TimestampMixin, Base):
    __tablename__ = "fee_structures"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    program_id = Column(Uuid, ForeignKey("programs.id"), nullable=True)
    semester = Column(String(20), nullable=False)
    fee_type = Column(String(50), nullable=False)
    amount = Column(BigInteger, nullable=False)
    due_date = Column(Date, nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class StudentFee(TimestampMixin, Base):
    """Fee charged to a student for a semester"""

    __tablename__ = "student_fees"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    fee_structure_id = Column(Uuid, ForeignKey("fee_structures.id"), nullable=False)
    semester = Column(String(20), nullable=False)
    amount_due = Column(BigInteger, nullable=False)
    amount_paid = Column(BigInteger, nullable=False, default=0)
    due_date = Column(Date, nullable=True)
    payment_status = Column(String(20), nullable=False, default="pending")
    paid_date = Column(Date, nullable=True)


class Payment(TimestampMixin, Base):
    __tablename__ = "payments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    receipt_number = Column(String(40), nullable=False, unique=True)
    student_fee_id = Column(Uuid, ForeignKey("student_fees.id"), nullable=False, index=True)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    payment_date = Column(Date, nullable=False)
    payment_method = Column(String(20), nullable=False)
    transaction_id = Column(String(100), nullable=True)
    received_by = Column(Uuid, nullable=True)
    remarks = Column(Text, nullable=True)


# ==================== HR & Payroll ====================


class Employee(TimestampMixin, Base):
    __tablename__ = "employees"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=True)
    employee_code = Column(String(30), nullable=False, unique=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    designation = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True, index=True)
    joining_date = Column(Date, nullable=True)
    employment_type = Column(String(20), nullable=False, default="permanent")
    status = Column(String(20), nullable=False, default="active")
    campus_id = Column(Uuid, ForeignKey("campuses.id"), nullable=True)


class LeaveRequest(TimestampMixin, Base):
    __tablename__ = "leave_requests"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    employee_id = Column(Uuid, ForeignKey("employees.id"), nullable=False, index=True)
    leave_type = Column(String(20), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    number_of_days = Column(Integer, nullable=False)
    reason = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    approved_by = Column(Uuid, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    rejection_reason = Column(Text, nullable=True)


class SalaryStructure(TimestampMixin, Base):
    """Monthly pay components; at most one active row per employee"""

    __tablename__ = "salary_structures"
    __table_args__ = (
        Index(
            "uq_salary_structures_active_employee",
            "employee_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    employee_id = Column(Uuid, ForeignKey("employees.id"), nullable=False, index=True)
    basic_salary = Column(BigInteger, nullable=False)
    house_rent_allowance = Column(BigInteger, nullable=False, default=0)
    medical_allowance = Column(BigInteger, nullable=False, default=0)
    transport_allowance = Column(BigInteger, nullable=False, default=0)
    other_allowances = Column(BigInteger, nullable=False, default=0)
    provident_fund = Column(BigInteger, nullable=False, default=0)
    tax_deduction = Column(BigInteger, nullable=False, default=0)
    other_deductions = Column(BigInteger, nullable=False, default=0)
    gross_salary = Column(BigInteger, nullable=False)
    net_salary = Column(BigInteger, nullable=False)
    effective_date = Column(Date, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)


class SalaryProcessing(TimestampMixin, Base):
    """Monthly salary computed for one employee and payroll period"""

    __tablename__ = "salary_processings"
    __table_args__ = (
        UniqueConstraint("employee_id", "payroll_period", name="uq_salary_processings_employee_period"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    employee_id = Column(Uuid, ForeignKey("employees.id"), nullable=False, index=True)
    salary_structure_id = Column(Uuid, ForeignKey("salary_structures.id"), nullable=False)
    payroll_period = Column(String(7), nullable=False, index=True)
    days_in_month = Column(Integer, nullable=False)
    days_worked = Column(Integer, nullable=False)
    basic_salary = Column(BigInteger, nullable=False)
    allowances = Column(BigInteger, nullable=False, default=0)
    bonus = Column(BigInteger, nullable=False, default=0)
    overtime = Column(BigInteger, nullable=False, default=0)
    gross_salary = Column(BigInteger, nullable=False)
    provident_fund = Column(BigInteger, nullable=False, default=0)
    tax_amount = Column(BigInteger, nullable=False, default=0)
    advance_deduction = Column(BigInteger, nullable=False, default=0)
    deductions = Column(BigInteger, nullable=False, default=0)
    net_salary = Column(BigInteger, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    processed_by = Column(Uuid, nullable=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(Uuid, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    payment_date = Column(Date, nullable=True)
    remarks = Column(Text, nullable=True)


class SalarySlip(Base):
    __tablename__ = "salary_slips"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    salary_processing_id = Column(Uuid, ForeignKey("salary_processings.id"), nullable=False, unique=True)
    employee_id = Column(Uuid, ForeignKey("employees.id"), nullable=False, index=True)
    payroll_period = Column(String(7), nullable=False)
    slip_number = Column(String(40), nullable=False, unique=True)
    gross_salary = Column(BigInteger, nullable=False)
    deductions = Column(BigInteger, nullable=False)
    net_salary = Column(BigInteger, nullable=False)
    generated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


# ==================== Library ====================


class Book(TimestampMixin, Base):
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("available_copies >= 0", name="ck_books_available_non_negative"),
        CheckConstraint("available_copies <= total_copies", name="ck_books_available_within_total"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    isbn = Column(String(20), nullable=True, unique=True)
    title = Column(String(300), nullable=False)
    author = Column(String(200), nullable=False)
    publisher = Column(String(200), nullable=True)
    publication_year = Column(Integer, nullable=True)
    category = Column(String(100), nullable=True)
    language = Column(String(50), nullable=True)
    total_copies = Column(Integer, nullable=False, default=1)
    available_copies = Column(Integer, nullable=False, default=1)
    location = Column(String(100), nullable=True)


class BookBorrowing(TimestampMixin, Base):
    """Loan of a single book copy"""

    __tablename__ = "book_borrowings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    book_id = Column(Uuid, ForeignKey("books.id"), nullable=False, index=True)
    user_id = Column(Uuid, nullable=False, index=True)
    user_type = Column(String(20), nullable=False, default="student")
    borrowed_date = Column(DateTime(timezone=True), nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False)
    return_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), nullable=False, default="borrowed")
    fine_amount = Column(BigInteger, nullable=False, default=0)
    fine_paid = Column(Boolean, nullable=False, default=True)
    renewed_count = Column(Integer, nullable=False, default=0)
    remarks = Column(Text, nullable=True)


class BookReservation(TimestampMixin, Base):
    __tablename__ = "book_reservations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    book_id = Column(Uuid, ForeignKey("books.id"), nullable=False, index=True)
    user_id = Column(Uuid, nullable=False, index=True)
    user_type = Column(String(20), nullable=False, default="student")
    reservation_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    expiry_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), nullable=False, default="pending")


# ==================== Learning ====================


class Assignment(TimestampMixin, Base):
    __tablename__ = "assignments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    course_id = Column(Uuid, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=False)
    max_marks = Column(Float, nullable=False)
    is_published = Column(Boolean, nullable=False, default=False)
    created_by = Column(Uuid, nullable=True)


class AssignmentSubmission(TimestampMixin, Base):
    __tablename__ = "assignment_submissions"
    __table_args__ = (
        UniqueConstraint("assignment_id", "student_id", name="uq_submissions_assignment_student"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    assignment_id = Column(Uuid, ForeignKey("assignments.id"), nullable=False, index=True)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    submission_text = Column(Text, nullable=True)
    file_url = Column(Text, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default="submitted")
    obtained_marks = Column(Float, nullable=True)
    feedback = Column(Text, nullable=True)
    graded_by = Column(Uuid, nullable=True)
    graded_at = Column(DateTime(timezone=True), nullable=True)


# ==================== Certification ====================


class CertificateRequest(TimestampMixin, Base):
    __tablename__ = "certificate_requests"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    certificate_type = Column(String(20), nullable=False)
    purpose = Column(Text, nullable=True)
    delivery_method = Column(String(20), nullable=False, default="pickup")
    delivery_address = Column(Text, nullable=True)
    fee_amount = Column(BigInteger, nullable=False, default=0)
    fee_paid = Column(Boolean, nullable=False, default=False)
    fee_payment_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    approved_by = Column(Uuid, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    processed_by = Column(Uuid, nullable=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)
    rejection_reason = Column(Text, nullable=True)
    remarks = Column(Text, nullable=True)


class Certificate(Base):
    """Issued certificate; rows are never updated once written"""

    __tablename__ = "certificates"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    certificate_request_id = Column(Uuid, ForeignKey("certificate_requests.id"), nullable=False, unique=True)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    certificate_type = Column(String(20), nullable=False)
    certificate_number = Column(String(30), nullable=False, unique=True)
    verification_code = Column(String(30), nullable=False, unique=True)
    issue_date = Column(Date, nullable=False)
    student_name = Column(String(200), nullable=False)
    details = Column(JSON, nullable=True)
    issued_by = Column(Uuid, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


# ==================== Multi-campus ====================


class StudentTransfer(TimestampMixin, Base):
    __tablename__ = "student_transfers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    from_campus_id = Column(Uuid, ForeignKey("campuses.id"), nullable=False)
    to_campus_id = Column(Uuid, ForeignKey("campuses.id"), nullable=False)
    reason = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    effective_date = Column(Date, nullable=True)
    approved_by = Column(Uuid, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    rejection_reason = Column(Text, nullable=True)


class StaffTransfer(TimestampMixin, Base):
    __tablename__ = "staff_transfers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    employee_id = Column(Uuid, ForeignKey("employees.id"), nullable=False, index=True)
    from_campus_id = Column(Uuid, ForeignKey("campuses.id"), nullable=False)
    to_campus_id = Column(Uuid, ForeignKey("campuses.id"), nullable=False)
    transfer_type = Column(String(20), nullable=False, default="permanent")
    reason = Column(Text, nullable=False)
    requested_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    transfer_date = Column(Date, nullable=True)
    effective_date = Column(Date, nullable=True)
    approved_by = Column(Uuid, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    rejection_reason = Column(Text, nullable=True)
    remarks = Column(Text, nullable=True)
