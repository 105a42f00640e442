import uuid

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Boolean, Numeric, CheckConstraint, Index
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID, JSONB, ARRAY
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector

from .base import Base

EMBEDDING_DIMENSIONS = 768


class Business(Base):
    """
    A directory entry for an Alabama AI company.

    Created and curated by admin/import processes; the matchmaking core only reads it.
    """
    __tablename__ = 'businesses'

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Core Identity
    name = Column('businessname', Text)
    category = Column(Text)
    location = Column(Text)
    description = Column(Text)
    website = Column(Text)
    logo_url = Column(Text)
    owner_id = Column(Text)

    # Labels
    tags = Column(ARRAY(Text))
    certifications = Column(ARRAY(Text))

    # Quality Signals
    verified = Column(Boolean, default=False)
    rating = Column(Numeric(2, 1))
    review_count = Column(Integer)

    # Size / Maturity
    employees_count = Column(Integer)
    founded_year = Column(Integer)

    # Engagement budget (USD)
    project_budget_min = Column(Numeric)
    project_budget_max = Column(Numeric)

    created_at = Column(TIMESTAMP(timezone=True), server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), server_default=sql_text("timezone('UTC', now())"), onupdate=sql_text("timezone('UTC', now())"))

    embedding = relationship("BusinessEmbedding", back_populates="business", uselist=False, cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint('rating IS NULL OR (rating >= 0 AND rating <= 5)', name='ck_businesses_rating_range'),
        CheckConstraint(
            'project_budget_min IS NULL OR project_budget_max IS NULL OR project_budget_min <= project_budget_max',
            name='ck_businesses_budget_range'
        ),
        Index('idx_businesses_category', 'category'),
        Index('idx_businesses_location', 'location'),
        Index('idx_businesses_rating', 'rating'),
    )


class BusinessEmbedding(Base):
    """
    Vector embedding of a business profile for similarity search.
    """
    __tablename__ = 'business_embeddings'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(Integer, ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False, unique=True)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS))
    metadata_ = Column('metadata', JSONB, default={})
    updated_at = Column(TIMESTAMP(timezone=True), server_default=sql_text("timezone('UTC', now())"), onupdate=sql_text("timezone('UTC', now())"))

    business = relationship("Business", back_populates="embedding")
