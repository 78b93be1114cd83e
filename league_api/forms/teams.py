"""Team payload form."""

from __future__ import annotations

from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField
from wtforms.validators import AnyOf, DataRequired, Length, NumberRange, Optional

from league_api.forms import strip_or_none
from league_api.models import SportType, TeamType

MAX_STADIUM_CAPACITY = 1_000_000


class TeamForm(FlaskForm):
    name = StringField(
        "Name",
        filters=[strip_or_none],
        validators=[DataRequired(message="Name is required"), Length(max=255)],
    )
    city = StringField(
        "City",
        filters=[strip_or_none],
        validators=[DataRequired(message="City is required"), Length(max=255)],
    )
    stadium = StringField(
        "Stadium",
        filters=[strip_or_none],
        validators=[DataRequired(message="Stadium is required"), Length(max=255)],
    )
    sport = StringField(
        "Sport",
        filters=[strip_or_none],
        validators=[
            DataRequired(message="Sport is required"),
            AnyOf([s.value for s in SportType], message="Sport must be one of: %(values)s"),
        ],
    )
    stadium_photo = StringField("Stadium photo", filters=[strip_or_none], validators=[Optional(), Length(max=512)])
    team_type = StringField(
        "Team type",
        filters=[strip_or_none],
        validators=[
            Optional(),
            AnyOf([t.value for t in TeamType], message="Team type must be one of: %(values)s"),
        ],
    )
    stadium_location = StringField("Stadium location", filters=[strip_or_none], validators=[Optional(), Length(max=255)])
    stadium_capacity = IntegerField(
        "Stadium capacity",
        validators=[
            Optional(),
            NumberRange(
                min=0,
                max=MAX_STADIUM_CAPACITY,
                message="Stadium capacity must be between %(min)s and %(max)s",
            ),
        ],
    )
