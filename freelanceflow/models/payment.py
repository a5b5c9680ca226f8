from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Numeric
from freelanceflow.db.base import Base


class Payment(Base):
    """
    Money received (or expected) against an invoice.
    """
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    invoice_id = Column(Integer, nullable=False, index=True)
    client_id = Column(Integer, nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    method = Column(String(50), nullable=True)  # Bank Transfer, PayPal, Stripe, ...
    status = Column(String(20), nullable=False, default="Pending")
    received_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Payment(id={self.id}, invoice_id={self.invoice_id}, status='{self.status}')>"
