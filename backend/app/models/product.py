from sqlalchemy import Boolean, Column, Float, String

from app.db.base import Base


class Product(Base):
    __tablename__ = "products"

    # ObjectId hex, so ids look the same whichever store is in use
    id = Column(String(24), primary_key=True)
    name = Column(String(256), nullable=False)
    price = Column(Float, nullable=False)
    available = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name}>"
