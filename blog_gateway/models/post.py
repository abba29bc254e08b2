from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from blog_gateway.database import Base


class Post(Base):
    __tablename__ = "posts"

    post_id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    title = Column(String(255))
    description = Column(Text)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<Post(post_id={self.post_id}, user_id={self.user_id})>"
