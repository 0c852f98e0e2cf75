"""
SQLAlchemy ORM Models for the Session Store

One table of finished sessions, keyed per constant. Insertion order is kept
explicitly in the autoincrement `seq` column so newest-first listing does not
depend on backend iteration order.
"""

from sqlalchemy import Boolean, Column, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class SessionRecord(Base):
    """
    Persistent summary of one finished recitation session.
    """
    __tablename__ = 'session_records'

    # Insertion order (newest = highest)
    seq = Column(Integer, primary_key=True, autoincrement=True)

    # Stable identifier shared with SessionSummary.record_id
    record_id = Column(String(36), unique=True, nullable=False)

    # Constant slug: "pi", "phi", "e"
    constant = Column(String(16), nullable=False)

    # Timing
    started_at = Column(DateTime(timezone=True), nullable=False)
    duration_seconds = Column(Float, nullable=False)

    # Counters
    digits_recited = Column(Integer, nullable=False)
    correct = Column(Integer, nullable=False)
    wrong = Column(Integer, nullable=False)
    pauses = Column(Integer, nullable=False)
    accuracy = Column(Float, nullable=False)  # 0.0 ... 1.0
    auto_ended = Column(Boolean, nullable=False, default=False)

    # Full transcript as JSON list of tagged tokens
    tokens = Column(Text, nullable=False)

    __table_args__ = (
        Index('idx_session_records_constant_seq', 'constant', 'seq'),
    )

    def __repr__(self):
        return f"<SessionRecord({self.record_id}, {self.constant}, correct={self.correct}, wrong={self.wrong})>"
