from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from shared.config.database import Base

ROLE_CUSTOMER = "Customer"
ROLE_ADMIN = "Admin"

STATUS_ACTIVE = "Active"
STATUS_INACTIVE = "Inactive"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    city = Column(String(100), nullable=True)
    profile_picture = Column(String(255), nullable=True)
    role = Column(String(20), default=ROLE_CUSTOMER, nullable=False)
    status = Column(String(20), default=STATUS_ACTIVE, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE
