from brandstudio.extensions import db
from .base import BaseModel


class Brand(BaseModel):
    __tablename__ = "brands"

    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True)
