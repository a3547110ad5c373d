"""Forms for the room blueprint."""

from flask_wtf import FlaskForm
from wtforms import PasswordField, SelectField, StringField
from wtforms.validators import DataRequired, Optional

from scoreroom.core.constants import SUPPORTED_LANGUAGES


class RoomEntryForm(FlaskForm):
    """Form for entering a room by code."""

    code = StringField("Room Code", validators=[DataRequired()])

    # Only the scorer entry uses it; blank falls back to the cached pin.
    password = PasswordField("Scorer Password", validators=[Optional()])


class LanguageForm(FlaskForm):
    """Form for picking the interface language."""

    lang = SelectField(
        "Language",
        choices=[(code, code) for code in SUPPORTED_LANGUAGES],
        validators=[DataRequired()],
    )
