from typing import List, Optional
import enum

from sqlalchemy import (
    JSON, Column, ForeignKey, Integer, Numeric, String, Text, DateTime,
    Enum as SAEnum, UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship, Mapped

Base = declarative_base()

class UniversityType(enum.Enum):
    GOVERNMENT = "government"
    PRIVATE = "private"
    SEMI_GOVERNMENT = "semi_government"

class University(Base):
    __tablename__ = "universities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    type = Column(SAEnum(UniversityType), nullable=False, default=UniversityType.GOVERNMENT)
    website = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    faculties: Mapped[List["Faculty"]] = relationship(
        "Faculty",
        back_populates="university",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<University(id={self.id}, name={self.name}, type={self.type.value})>"

class Faculty(Base):
    __tablename__ = "faculties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    university_id = Column(Integer, ForeignKey("universities.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)

    university: Mapped[University] = relationship("University", back_populates="faculties")

    def __repr__(self):
        return f"<Faculty(id={self.id}, name={self.name})>"

class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    university_id = Column(Integer, ForeignKey("universities.id"), nullable=False, index=True)
    faculty_id = Column(Integer, ForeignKey("faculties.id"), nullable=True, index=True)
    specialisations = Column(JSON, nullable=False, default=list)
    course_code = Column(String(50), unique=True, nullable=True)
    course_url = Column(String(255), nullable=True)
    duration_months = Column(Integer, nullable=True)
    study_mode = Column(String(50), nullable=True)
    course_type = Column(String(50), nullable=True)
    fee_type = Column(String(50), nullable=True)
    fee_amount = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    university: Mapped[University] = relationship("University")
    faculty: Mapped[Optional[Faculty]] = relationship("Faculty")

    def __repr__(self):
        return f"<Course(id={self.id}, name={self.name})>"

class SavedCourse(Base):
    __tablename__ = "saved_courses"

    # One bookmark per (user, course); concurrent toggles rely on this constraint.
    __table_args__ = (
        UniqueConstraint('user_id', 'course_id', name='unique_user_saved_course'),
        # Deleted bookmark ids are never handed out again
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Users live in the identity provider; only the id is stored here.
    user_id = Column(Integer, nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<SavedCourse(id={self.id}, user_id={self.user_id}, course_id={self.course_id})>"
