from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from app.database import Base

class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True)
    name = Column(String(30), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    token = Column(String(1024), index=True, nullable=False, default="")
    token_expire_at = Column(DateTime(timezone=True), nullable=True)

    tasks = relationship("Task", back_populates="owner", passive_deletes=True)
