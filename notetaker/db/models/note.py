from sqlalchemy import Column, Integer, String, Text, DateTime

from notetaker.core.db import Base


class Note(Base):
    __tablename__ = "note"
    # id никогда не переиспользуются, в том числе в SQLite
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    user = Column(String(255), nullable=True, default=None)
    location = Column(String(255), nullable=True, default=None)
    inserted_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
