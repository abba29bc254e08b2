from sqlalchemy import Column, Date, DateTime, Integer, String, func

from blog_gateway.database import Base


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String(255))
    last_name = Column(String(255))
    email = Column(String(255))
    birthday = Column(Date)
    address = Column(String(255))
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Client(id={self.id}, email='{self.email}')>"
