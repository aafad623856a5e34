"""Forms used to validate goal payloads posted to the API."""

from __future__ import annotations

from typing import Any, Mapping

from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import DateField, FloatField, IntegerField, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, ValidationError

from .constants import (
    DEFAULT_XP_VALUE,
    HABIT_TYPE_CHOICES,
    XP_VALUE_MAX,
    XP_VALUE_MIN,
    HabitType,
    rule_for,
)

_HABIT_TYPE_VALUES = frozenset(value for value, _ in HABIT_TYPE_CHOICES)


class GoalForm(FlaskForm):
    """Create or edit a goal or habit."""

    class Meta:
        csrf = False

    title = StringField('Title', validators=[DataRequired(), Length(max=200)])
    description = TextAreaField('Description', validators=[Optional(), Length(max=2000)])
    category = StringField('Category', validators=[Optional(), Length(max=100)])

    habit_type = SelectField('Type', choices=HABIT_TYPE_CHOICES, default=HabitType.ONE_TIME.value)
    # Checked in validate_target_value: only goals need a target
    target_value = FloatField('Target')
    unit = StringField('Unit', validators=[Optional(), Length(max=50)])
    deadline = DateField('Deadline', format='%Y-%m-%d', validators=[Optional()])

    xp_value = IntegerField(
        'XP value',
        default=DEFAULT_XP_VALUE,
        validators=[Optional(), NumberRange(min=XP_VALUE_MIN, max=XP_VALUE_MAX)],
    )

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> 'GoalForm':
        """Build a form from a decoded JSON body."""
        formdata = MultiDict()
        for name, value in (payload or {}).items():
            if value is None:
                continue
            formdata[name] = value if isinstance(value, str) else str(value)
        return cls(formdata=formdata)

    def validate_target_value(self, field: FloatField) -> None:  # type: ignore[override]
        # Unknown types are reported by the habit_type field itself
        if self.habit_type.data in _HABIT_TYPE_VALUES and rule_for(self.habit_type.data).is_habit:
            return
        if field.data is None:
            raise ValidationError('A target is required for goals.')
        if field.data <= 0:
            raise ValidationError('Target must be greater than zero.')

    def cleaned_data(self) -> dict:
        """Field values keyed the way the goal service expects them."""
        return {
            'title': (self.title.data or '').strip(),
            'description': self.description.data or None,
            'category': (self.category.data or '').strip() or None,
            'habit_type': HabitType(self.habit_type.data),
            'target_value': self.target_value.data,
            'unit': (self.unit.data or '').strip(),
            'deadline': self.deadline.data,
            'xp_value': self.xp_value.data if self.xp_value.data is not None else DEFAULT_XP_VALUE,
        }
