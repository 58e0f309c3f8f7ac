from werkzeug.security import generate_password_hash, check_password_hash
from brandstudio.extensions import db
from .base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)

    role = db.Column(db.String(50), nullable=False, default="brand")  # admin | operator | brand | agent
    brand_id = db.Column(db.String(36), db.ForeignKey("brands.id"), nullable=True, index=True)
    is_active = db.Column(db.Boolean, default=True)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
