from sqlalchemy import Column, String, ForeignKey, Integer, Numeric, Boolean, Index
from sqlalchemy.orm import relationship

from database import DBBaseClass, DBBase


class Rate_Card(DBBaseClass, DBBase):
    __tablename__ = "rate_card"

    courier_id = Column(Integer, ForeignKey("courier.id"), nullable=False)

    # custom row of a client, NULL for rows that belong to a rate band
    client_id = Column(Integer, ForeignKey("client.id"), nullable=True, index=True)
    rate_band = Column(String(100), nullable=True, index=True)

    # Zone value, e.g. "Within City"
    zone = Column(String(50), nullable=False)

    # first weight unit
    base_rate = Column(Numeric(10, 2), nullable=False)
    # every weight unit after the first
    additional_rate = Column(Numeric(10, 2), nullable=False)
    rto_rate = Column(Numeric(10, 2), nullable=False, default=0)

    cod_percentage_rate = Column(Numeric(5, 2), nullable=False, default=0)  # COD percentage rate
    cod_absolute_rate = Column(Numeric(10, 2), nullable=False, default=0)  # COD absolute rate

    gst_percentage = Column(Numeric(5, 2), nullable=False, default=18)

    isActive = Column(Boolean, default=True, nullable=False)

    courier = relationship("Courier", back_populates="rate_cards", lazy="noload")
    client = relationship("Client", back_populates="rate_cards", lazy="noload")

    __table_args__ = (
        Index("ix_rate_card_lookup", "client_id", "rate_band", "zone"),
    )
