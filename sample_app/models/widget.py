"""
Widget Model

The primary record: tagged with a widget type and carrying an arbitrary
JSON payload in `data`.
"""

from datetime import datetime
from ..extensions import db
from .widget_type import WidgetType, generate_id


class Widget(db.Model):
    """
    A widget instance belonging to a widget type.
    """
    __tablename__ = 'widgets'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    widget_type_id = db.Column(db.String(36), db.ForeignKey('widget_types.id'), nullable=False, index=True)

    name = db.Column(db.String(255), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    # Arbitrary JSON payload (button text, chart options, table columns, ...)
    data = db.Column(db.JSON, nullable=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # passive_deletes='all': deleting a type leaves its widgets untouched
    widget_type = db.relationship(
        'WidgetType',
        backref=db.backref('widgets', lazy='dynamic', passive_deletes='all')
    )

    def __repr__(self):
        return f'<Widget {self.name!r} type={self.widget_type_id} active={self.is_active}>'

    def to_dict(self):
        """Serialize widget to dictionary."""
        return {
            'id': self.id,
            'widgetTypeId': self.widget_type_id,
            'name': self.name,
            'description': self.description,
            'isActive': self.is_active,
            'data': self.data,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def get_active(cls) -> list:
        """Get all active widgets, newest first."""
        return cls.query.filter_by(is_active=True).order_by(cls.created_at.desc()).all()

    @classmethod
    def get_by_type(cls, widget_type_id: str) -> list:
        """Get all widgets of one type, newest first."""
        return cls.query.filter_by(widget_type_id=widget_type_id).order_by(cls.created_at.desc()).all()

    @classmethod
    def get_by_type_code(cls, code: str) -> list:
        """Get all widgets whose type has the given code, newest first."""
        return (
            cls.query.join(WidgetType, cls.widget_type_id == WidgetType.id)
            .filter(WidgetType.code == code)
            .order_by(cls.created_at.desc())
            .all()
        )

    @classmethod
    def get_recent(cls, since: datetime) -> list:
        """Get widgets created after `since`, newest first."""
        return cls.query.filter(cls.created_at > since).order_by(cls.created_at.desc()).all()
