"""Forms for the scorer blueprint."""

from flask_wtf import FlaskForm
from wtforms import (
    BooleanField,
    IntegerField,
    RadioField,
    SelectField,
    SelectMultipleField,
    StringField,
    TextAreaField,
)
from wtforms.validators import DataRequired, NumberRange, Optional
from scoreroom.schedule.services import ScheduleFormat


class PlayerForm(FlaskForm):
    """Form for adding or renaming a player."""

    name = StringField("Name", validators=[DataRequired()])


class PointsForm(FlaskForm):
    """Form for a manual point adjustment; negative deltas subtract."""

    delta = IntegerField("Points", validators=[NumberRange(message="Enter a number.")])


class ScoreForm(FlaskForm):
    """Form for submitting a match result."""

    score_p1 = IntegerField("Player 1 Score", validators=[NumberRange(min=0)])

    score_p2 = IntegerField("Player 2 Score", validators=[NumberRange(min=0)])


class ScheduleForm(FlaskForm):
    """Form for generating a schedule."""

    format = SelectField(
        "Tournament Format",
        choices=[
            (ScheduleFormat.SINGLE_ELIMINATION.value, "1V1 Single Elimination"),
            (ScheduleFormat.SWISS.value, "Swiss"),
            (ScheduleFormat.ROUND_ROBIN.value, "Group Round Robin"),
        ],
        validators=[DataRequired()],
    )

    confirm = BooleanField("Clear existing matches")


class TimerForm(FlaskForm):
    """Form for starting or resetting the timer."""

    minutes = IntegerField("Minutes", validators=[Optional(), NumberRange(min=1)])


class BroadcastForm(FlaskForm):
    """Form for sending a broadcast."""

    text = TextAreaField("Message", validators=[DataRequired()])

    target = RadioField(
        "Recipients",
        choices=[("all", "All"), ("select", "Selected players")],
        default="all",
    )

    # Choices are filled from the live roster by the view.
    player_ids = SelectMultipleField("Players", choices=[], validate_choice=False)


class ConfirmForm(FlaskForm):
    """Form for destructive actions that need an explicit yes."""

    confirm = BooleanField("Confirm")
