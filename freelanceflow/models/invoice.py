from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Text, Numeric, JSON, UniqueConstraint
from freelanceflow.db.base import Base


class Invoice(Base):
    """
    An invoice issued to a client.

    client_id has no foreign key: deleting a client keeps its invoices.
    Invoice numbers are unique per owner, not globally.
    """
    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint("user_id", "invoice_number", name="uq_invoices_user_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    client_id = Column(Integer, nullable=False, index=True)
    invoice_number = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    status = Column(String(20), nullable=False, default="Draft")  # Draft, Sent, Paid, Overdue
    issue_date = Column(DateTime(timezone=True), nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False)
    paid_date = Column(DateTime(timezone=True), nullable=True)
    items = Column(JSON, nullable=True)  # [{"description": ..., "quantity": ..., "rate": ..., "amount": ...}]
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Invoice(id={self.id}, number='{self.invoice_number}', status='{self.status}')>"
