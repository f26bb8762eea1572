from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Float, Integer, String, true
from sqlalchemy.sql import func

from app.database import Base


class Product(Base):
    """
    Product model representing items in the catalog.

    Attributes:
        id: Unique identifier for the product, assigned by the database
        name: Product name (never empty)
        price: Product price (must be positive)
        availability: Whether the product is currently available
        created_at: Timestamp when product was created
        updated_at: Timestamp when product was last updated
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    availability = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Database-level constraints to ensure data integrity
    __table_args__ = (
        CheckConstraint("price > 0", name="check_price_positive"),
        CheckConstraint("length(name) > 0", name="check_name_not_empty"),
    )

    def __repr__(self):
        return (
            f"<Product(id={self.id}, name='{self.name}', "
            f"price={self.price}, availability={self.availability})>"
        )
