# backend/models/product.py
from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

# Base catalog product (e.g. "Washing machine 8kg"), carries the price
class HomeAppliance(Base):
    __tablename__ = "home_appliances"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String, unique=True, nullable=False, index=True)
    description = Column(String, nullable=False)
    category = Column(String, index=True)

    # Whole currency units
    price = Column(Integer, CheckConstraint("price >= 0"), nullable=False)

    items = relationship("ApplianceItem", back_populates="home_appliance", cascade="all, delete-orphan")


# Concrete purchasable configuration (brand/model/warranty) of a home appliance
class ApplianceItem(Base):
    __tablename__ = "appliance_items"

    id = Column(Integer, primary_key=True, index=True)
    home_appliance_id = Column(Integer, ForeignKey("home_appliances.id"), index=True, nullable=False)
    warranty_years = Column(Integer, CheckConstraint("warranty_years >= 0"), nullable=False, default=0)
    brand = Column(String, nullable=False)
    model = Column(String, nullable=False)

    home_appliance = relationship("HomeAppliance", back_populates="items", lazy="joined")
