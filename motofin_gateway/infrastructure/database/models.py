"""SQLAlchemy ORM models for the document store and issued quotations"""

from sqlalchemy import Column, String, BigInteger, Boolean, Float, DateTime, Integer, Text, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class Document(Base):
    """Keyed JSON document with an optimistic-lock version"""

    __tablename__ = "documents"

    key = Column(String(255), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    version = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # UPDATE ... WHERE version = :old; a lost race raises StaleDataError on flush
    __mapper_args__ = {"version_id_col": version}


class Quotation(Base):
    """Quotation issued to a lead through the quote-request workflow"""

    __tablename__ = "quotation"

    quote_id = Column(String(32), primary_key=True)
    customer_name = Column(Text, nullable=False)
    phone = Column(Text, nullable=False, index=True)
    interest_query = Column(Text, nullable=False)
    category = Column(Text, nullable=True)
    classification_score = Column(Float, nullable=True)
    classification_method = Column(Text, nullable=True)
    routing_status = Column(Text, nullable=False)
    routing_reason = Column(Text, nullable=True)
    lender_id = Column(Text, nullable=True)
    lender_name = Column(Text, nullable=True)
    credit_bureau_flag = Column(Boolean, nullable=False, default=False)
    daily_budget = Column(Float, nullable=False)
    down_payment = Column(BigInteger, nullable=False)
    term_months = Column(Integer, nullable=False)
    max_loan_principal = Column(BigInteger, nullable=False)
    max_asset_price = Column(BigInteger, nullable=False)
    gross_financed_amount = Column(BigInteger, nullable=False)
    estimated_monthly_payment = Column(BigInteger, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
