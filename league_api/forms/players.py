"""Player payload form.

Position is checked against the team's sport by the player service, since
the form alone does not know which team the player joins.
"""

from __future__ import annotations

from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField
from wtforms.validators import AnyOf, DataRequired, InputRequired, Length, NumberRange, Optional

from league_api.forms import strip_or_none
from league_api.models import PlayerStatus


class PlayerForm(FlaskForm):
    first_name = StringField(
        "First name",
        filters=[strip_or_none],
        validators=[DataRequired(message="First name is required"), Length(max=255)],
    )
    last_name = StringField(
        "Last name",
        filters=[strip_or_none],
        validators=[DataRequired(message="Last name is required"), Length(max=255)],
    )
    player_number = IntegerField(
        "Player number",
        validators=[
            InputRequired(message="Player number is required"),
            NumberRange(min=0, max=999, message="Player number must be between 0 and 999"),
        ],
    )
    position = StringField(
        "Position",
        filters=[strip_or_none],
        validators=[DataRequired(message="Position is required"), Length(max=64)],
    )
    status = StringField(
        "Status",
        filters=[strip_or_none],
        validators=[
            Optional(),
            AnyOf([s.value for s in PlayerStatus], message="Status must be one of: %(values)s"),
        ],
    )
    hometown = StringField("Hometown", filters=[strip_or_none], validators=[Optional(), Length(max=255)])
    headshot = StringField("Headshot", filters=[strip_or_none], validators=[Optional(), Length(max=512)])
