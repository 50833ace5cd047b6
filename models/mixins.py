from datetime import datetime
from sqlalchemy import Column, DateTime

# Local wall-clock time: weekly windows and day filters are local too.

class CreatedAtMixin:
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)
class UpdatedAtMixin:
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)
