"""
Shop database model.
"""

from sqlalchemy import Column, Integer, String, JSON

from app.database import Base

UNKNOWN_LOCATION = "Unknown location"


class Shop(Base):
    """Shop document: contact details, photo reference and location."""

    __tablename__ = "shops"

    # Storage-internal key, never exposed to clients
    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(String, nullable=False, unique=True, index=True)
    owner_name = Column(String, nullable=False)
    contact_number = Column(String, nullable=False)
    shop_number = Column(String, nullable=False)
    address = Column(String, nullable=False)
    description = Column(String, nullable=False)
    photo = Column(String, nullable=False, default="")  # e.g. /uploads/1700000000000.jpg
    timestamp = Column(String, nullable=False)  # YYYY-MM-DD HH:MM:SS
    # {"latitude": str, "longitude": str, "placeName": str}
    location = Column(JSON, nullable=False)

    def __repr__(self):
        return f"<Shop {self.external_id} {self.owner_name!r}>"
