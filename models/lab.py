from extensions import db


class Lab(db.Model):
    __tablename__ = "labs"

    lab_id = db.Column(db.Integer, primary_key=True)
    lab_code = db.Column(db.String(20), nullable=False)
    lab_name = db.Column(db.String(100), nullable=False)
    semester = db.Column(db.Integer, nullable=False)
    department = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    assignments = db.relationship("LabAssignment", backref="lab", lazy=True)

    def to_dict(self):
        return {
            "lab_id": self.lab_id,
            "lab_code": self.lab_code,
            "lab_name": self.lab_name,
            "semester": self.semester,
            "department": self.department,
        }

    def __repr__(self):
        return f"<Lab {self.lab_code}>"
