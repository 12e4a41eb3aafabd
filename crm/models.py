import secrets
import uuid

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

QUESTION_TYPES = ("text", "email", "textarea", "select", "radio", "checkbox", "rating")


def generate_public_id():
    """Generate a unique public ID for secure public access"""
    return str(uuid.uuid4())


def generate_api_key():
    return secrets.token_urlsafe(32)


class Business(Base):
    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True, index=True)
    public_id = Column(String(36), unique=True, index=True, default=generate_public_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    website = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    # Key presented in X-API-Key to act on behalf of this business
    api_key = Column(String(64), unique=True, index=True, nullable=False, default=generate_api_key)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    customers = relationship("Customer", back_populates="business", cascade="all, delete-orphan")
    surveys = relationship("Survey", back_populates="business", cascade="all, delete-orphan")


class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = (UniqueConstraint("business_id", "email", name="uq_customer_business_email"),)

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(Integer, ForeignKey("businesses.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    location = Column(String(255), nullable=True)
    age = Column(Integer, nullable=True)
    preferences = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    business = relationship("Business", back_populates="customers")
    responses = relationship("SurveyResponse", back_populates="customer")


class Survey(Base):
    __tablename__ = "surveys"

    id = Column(Integer, primary_key=True, index=True)
    public_id = Column(String(36), unique=True, index=True, default=generate_public_id)
    business_id = Column(Integer, ForeignKey("businesses.id", ondelete="CASCADE"), index=True, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), default="draft", nullable=False)  # draft, active, completed
    welcome_message = Column(Text, nullable=True)
    completion_message = Column(Text, nullable=True)
    # [{id, type, question, options?, required?}]
    questions = Column(JSON, nullable=False, default=list)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    business = relationship("Business", back_populates="surveys")
    responses = relationship("SurveyResponse", back_populates="survey", cascade="all, delete-orphan")


class SurveyResponse(Base):
    __tablename__ = "survey_responses"

    id = Column(Integer, primary_key=True, index=True)
    survey_id = Column(Integer, ForeignKey("surveys.id", ondelete="CASCADE"), index=True, nullable=False)
    # Denormalised so analytics can filter by tenant without a join
    business_id = Column(Integer, ForeignKey("businesses.id", ondelete="CASCADE"), index=True, nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="SET NULL"), index=True, nullable=True)
    answers = Column(JSON, nullable=False, default=dict)  # question id -> answer
    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    survey = relationship("Survey", back_populates="responses")
    customer = relationship("Customer", back_populates="responses")
