from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text

from blog_gateway.database import Base


class Comment(Base):
    __tablename__ = "comments"

    comment_id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.post_id"), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), index=True)
    description = Column(Text)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<Comment(comment_id={self.comment_id}, post_id={self.post_id})>"
