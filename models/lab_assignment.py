from extensions import db


class LabAssignment(db.Model):
    __tablename__ = "lab_assignments"

    assignment_id = db.Column(db.Integer, primary_key=True)

    lab_id = db.Column(
        db.Integer,
        db.ForeignKey("labs.lab_id"),
        nullable=False
    )

    faculty_id = db.Column(
        db.Integer,
        db.ForeignKey("users.user_id"),
        nullable=False
    )

    section = db.Column(db.String(10), nullable=False)
    batch = db.Column(db.String(10), nullable=False, default="All")
    academic_year = db.Column(db.String(9), nullable=False)   # "2025-26"
    semester_type = db.Column(db.String(10), nullable=False)  # Odd | Even
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    day_of_week = db.Column(db.String(10), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    faculty = db.relationship("User", lazy=True)
    sessions = db.relationship(
        "LabSession",
        backref="assignment",
        lazy=True,
        order_by="LabSession.session_date",
        cascade="all, delete-orphan"
    )

    @property
    def generated_dates(self):
        return [s.session_date for s in self.sessions]

    @property
    def weeks(self):
        return [(s.week_number, s.session_date) for s in self.sessions]

    def week_of(self, day):
        """Stored week number of a scheduled date, or None if it is off schedule."""
        return next((s.week_number for s in self.sessions if s.session_date == day), None)

    def __repr__(self):
        return f"<LabAssignment lab={self.lab_id} faculty={self.faculty_id}>"


class LabSession(db.Model):
    """One scheduled occurrence of an assignment; written once at creation."""

    __tablename__ = "lab_sessions"

    session_id = db.Column(db.Integer, primary_key=True)

    assignment_id = db.Column(
        db.Integer,
        db.ForeignKey("lab_assignments.assignment_id"),
        nullable=False
    )

    week_number = db.Column(db.Integer, nullable=False)
    session_date = db.Column(db.Date, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("assignment_id", "session_date", name="unique_assignment_date"),
        db.UniqueConstraint("assignment_id", "week_number", name="unique_assignment_week"),
    )

    def __repr__(self):
        return f"<LabSession week={self.week_number} {self.session_date}>"
