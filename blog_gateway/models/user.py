from sqlalchemy import Column, Date, DateTime, Integer, String

from blog_gateway.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(255))
    last_name = Column(String(255))
    email = Column(String(255), unique=True, index=True)
    birthday = Column(Date)
    address = Column(String(255))
    email_verified_at = Column(DateTime)
    password = Column(String(255))
    remember_token = Column(String(100))
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}')>"
