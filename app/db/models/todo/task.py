from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.enums import Priority
from app.db.session import Base


# Sort rank; the stored strings do not order correctly on their own.
PRIORITY_RANK = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    priority = Column(
        Enum(Priority, name="priority", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Priority.MEDIUM,
    )
    due_date = Column(DateTime(timezone=True), nullable=True)

    # Foreign Keys
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="tasks")
    tag_links = relationship("TaskTag", back_populates="task", passive_deletes=True)
    tags = relationship("Tag", secondary="task_tags", viewonly=True, order_by="Tag.name")
