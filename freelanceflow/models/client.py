from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Text
from freelanceflow.db.base import Base


class Client(Base):
    """
    A customer of the freelancer.

    Attributes:
        user_id: Owner of the record (tenant)
        status: 'Active' or 'Inactive'
        payment_terms: Free text such as "Net 30"
    """
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    company_name = Column(String(200), nullable=False)
    contact_person = Column(String(100), nullable=True)
    email = Column(String(100), nullable=True)
    phone = Column(String(30), nullable=True)
    address = Column(Text, nullable=True)
    payment_terms = Column(String(50), nullable=True, default="Net 30")
    status = Column(String(20), nullable=False, default="Active")
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Client(id={self.id}, user_id={self.user_id}, company='{self.company_name}')>"
