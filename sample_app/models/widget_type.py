"""
Widget Type Model

A reference/category record that widgets belong to. The code is a short
uppercase token (letters and underscores) and is unique across types.
"""

import uuid
from datetime import datetime
from ..extensions import db


def generate_id() -> str:
    return str(uuid.uuid4())


class WidgetType(db.Model):
    """
    A type of widget that can be created.

    Deleting a type never touches its widgets; see Widget.widget_type.
    """
    __tablename__ = 'widget_types'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)

    # Short uppercase token, e.g. BUTTON or TEXT_INPUT
    code = db.Column(db.String(50), nullable=False, unique=True, index=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<WidgetType {self.code} active={self.is_active}>'

    def to_dict(self):
        """Serialize widget type to dictionary."""
        return {
            'id': self.id,
            'code': self.code,
            'name': self.name,
            'description': self.description,
            'isActive': self.is_active,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def get_by_code(cls, code: str) -> 'WidgetType':
        """Get widget type by its (already normalized) code."""
        return cls.query.filter_by(code=code).first()

    @classmethod
    def get_active(cls) -> list:
        """Get all active widget types, newest first."""
        return cls.query.filter_by(is_active=True).order_by(cls.created_at.desc()).all()
