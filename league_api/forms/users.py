"""Forms for account sign-up and sign-in."""

from __future__ import annotations

from flask_wtf import FlaskForm
from wtforms import PasswordField, StringField
from wtforms.validators import AnyOf, DataRequired, Email, Length, Optional

from league_api.forms import strip_or_none
from league_api.models import UserRole


class SignUpForm(FlaskForm):
    username = StringField(
        "Username",
        filters=[strip_or_none],
        validators=[
            DataRequired(message="Username is required"),
            Length(min=3, max=64, message="Username must be at least 3 characters long"),
        ],
    )
    email = StringField(
        "Email",
        filters=[strip_or_none],
        validators=[
            DataRequired(message="Email is required"),
            Email(message="Please provide a valid email address"),
        ],
    )
    password = PasswordField(
        "Password",
        validators=[
            DataRequired(message="Password is required"),
            Length(min=6, message="Password must be at least 6 characters long"),
        ],
    )
    role = StringField(
        "Role",
        filters=[strip_or_none],
        validators=[
            Optional(),
            AnyOf([r.value for r in UserRole], message="Role must be one of: %(values)s"),
        ],
    )
    first_name = StringField("First name", filters=[strip_or_none], validators=[Optional(), Length(max=255)])
    last_name = StringField("Last name", filters=[strip_or_none], validators=[Optional(), Length(max=255)])


class SignInForm(FlaskForm):
    username = StringField("Username", filters=[strip_or_none], validators=[DataRequired(message="Username is required")])
    password = PasswordField("Password", validators=[DataRequired(message="Password is required")])
