"""Forms for the contestant blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired


class ClaimForm(FlaskForm):
    """Form for picking which player this device represents."""

    player_id = StringField("Player", validators=[DataRequired()])
