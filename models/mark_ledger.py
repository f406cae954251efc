from extensions import db


class MarkLedger(db.Model):
    __tablename__ = "mark_ledgers"

    ledger_id = db.Column(db.Integer, primary_key=True)

    student_id = db.Column(
        db.Integer,
        db.ForeignKey("users.user_id"),
        nullable=False
    )

    assignment_id = db.Column(
        db.Integer,
        db.ForeignKey("lab_assignments.assignment_id"),
        nullable=False
    )

    entered_by = db.Column(
        db.Integer,
        db.ForeignKey("users.user_id"),
        nullable=False
    )

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, nullable=True)

    student = db.relationship("User", foreign_keys=[student_id], lazy=True)
    assignment = db.relationship("LabAssignment", lazy=True)
    weeks = db.relationship(
        "WeekEntry",
        backref="ledger",
        lazy=True,
        order_by="WeekEntry.session_date",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.UniqueConstraint("student_id", "assignment_id", name="unique_student_assignment"),
    )

    def __repr__(self):
        return f"<MarkLedger student={self.student_id} assignment={self.assignment_id}>"


class WeekEntry(db.Model):
    __tablename__ = "week_entries"

    entry_id = db.Column(db.Integer, primary_key=True)

    ledger_id = db.Column(
        db.Integer,
        db.ForeignKey("mark_ledgers.ledger_id"),
        nullable=False
    )

    session_date = db.Column(db.Date, nullable=False)

    pr = db.Column(db.Float, nullable=True)     # preparation, 0-5
    pe = db.Column(db.Float, nullable=True)     # program execution, 0-5
    p = db.Column(db.Float, nullable=True)      # viva / questions, 0-10
    r = db.Column(db.Float, nullable=True)      # record, 0-5
    c = db.Column(db.Float, nullable=True)      # regularity, 0-5
    total = db.Column(db.Float, nullable=True)  # 0-30

    entered_by = db.Column(
        db.Integer,
        db.ForeignKey("users.user_id"),
        nullable=False
    )
    updated_at = db.Column(db.DateTime, nullable=True)

    enterer = db.relationship("User", foreign_keys=[entered_by], lazy=True)

    __table_args__ = (
        db.UniqueConstraint("ledger_id", "session_date", name="unique_ledger_date"),
    )

    def fields(self):
        return {
            "Pr": self.pr,
            "PE": self.pe,
            "P": self.p,
            "R": self.r,
            "C": self.c,
            "T": self.total,
        }

    def __repr__(self):
        return f"<WeekEntry ledger={self.ledger_id} {self.session_date}>"
