from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Text, Numeric
from freelanceflow.db.base import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    category = Column(String(50), nullable=False)  # e.g. Tools, Transport, Marketing, Tax, Office
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    receipt = Column(Text, nullable=True)  # file path or URL
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Expense(id={self.id}, category='{self.category}', amount={self.amount})>"
