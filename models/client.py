from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from database import DBBaseClass, DBBase


class Client(DBBase, DBBaseClass):
    __tablename__ = "client"

    client_name = Column(String(255), nullable=False)

    # rate band assigned by admin; NULL means the platform default band
    rate_band = Column(String(100), nullable=True)

    # custom rate card rows negotiated for this client
    rate_cards = relationship("Rate_Card", back_populates="client", lazy="noload")
