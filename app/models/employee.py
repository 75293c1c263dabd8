"""Employee model — company staff ("colaboradores")."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.sql import func

from app.database import Base


class Employee(Base):
    """Employee allocated (optionally) to a contract.

    Attributes:
        id: Primary key.
        full_name: Full legal name.
        cpf: Brazilian taxpayer id.
        role: Job title ("cargo").
        department: Department name.
        admission_date: Hiring date.
        termination_date: Termination date, if any.
        salary: Monthly salary (BRL).
        status: One of ``constants.EMPLOYEE_STATUS``.
        contract_id: FK to Contract.
    """

    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(300), nullable=False)
    cpf = Column(String(20), nullable=True)
    rg = Column(String(30), nullable=True)
    email = Column(String(200), nullable=True)
    phone = Column(String(30), nullable=True)
    role = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True)
    address = Column(String(500), nullable=True)
    city = Column(String(150), nullable=True)
    state = Column(String(50), nullable=True)
    admission_date = Column(Date, nullable=True)
    termination_date = Column(Date, nullable=True)
    salary = Column(Numeric(15, 2), nullable=True)
    status = Column(String(20), default="active", nullable=False)
    # "active", "inactive", "vacation", "terminated"
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
