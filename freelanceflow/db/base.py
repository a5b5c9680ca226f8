from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Models must be imported so their tables register on Base
from freelanceflow.models import client, invoice, expense, payment  # noqa: E402,F401
