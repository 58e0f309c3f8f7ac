from sqlalchemy.orm import declared_attr
from brandstudio.extensions import db


class BrandMixin:
    # Foreign keys on mixins must be declared lazily per mapped class.
    @declared_attr
    def brand_id(cls):
        return db.Column(
            db.String(36),
            db.ForeignKey("brands.id"),
            nullable=False,
            index=True,
        )
