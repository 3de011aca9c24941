from sqlalchemy import Column, String, Boolean, Numeric
from sqlalchemy.orm import relationship

from database import DBBaseClass, DBBase


class Courier(DBBase, DBBaseClass):
    __tablename__ = "courier"

    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True)
    product_name = Column(String(255), nullable=True)

    # "Surface" / "Air"; anything containing "air" is shown as Express
    mode = Column(String(50), nullable=False)
    logo = Column(String(255), nullable=True)

    # overrides VOLUMETRIC_DIVISOR for this courier when set
    volumetric_divisor = Column(Numeric(10, 2), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    rate_cards = relationship("Rate_Card", back_populates="courier", lazy="noload")
