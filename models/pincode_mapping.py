from sqlalchemy import Column, String, Integer, Index

from database import DBBaseClass, DBBase


class Pincode_Mapping(DBBase, DBBaseClass):

    __tablename__ = "pincode_mapping"

    # Unique index on pincode for fast lookups and data integrity
    pincode = Column(Integer, nullable=False, unique=True)
    # City and state are stored in lowercase for consistency and case-insensitive comparisons
    city = Column(String(50), nullable=False)
    state = Column(String(50), nullable=False)

    # Covering index: zone lookups read pincode, city and state together
    __table_args__ = (
        Index("ix_pincode_mapping_pincode_city_state", "pincode", "city", "state"),
    )
