"""Account registration and credential checks."""

from __future__ import annotations

from typing import Any

from flask import current_app
from sqlalchemy import func, select

from league_api.errors import AuthenticationError, AuthorizationError, ConflictError
from league_api.extensions import db
from league_api.forms import validate_payload
from league_api.forms.users import SignInForm, SignUpForm
from league_api.models import User, UserRole
from league_api.services.crud import CRUDService
from league_api.services.tokens import issue_token


class UserService(CRUDService):
    """Credential store operations."""

    conflict_messages = {
        'user.username': "Username already taken.",
        'user_username_key': "Username already taken.",
        'user.email': "Email already registered.",
        'user_email_key': "Email already registered.",
    }

    def __init__(self):
        super().__init__(User)

    def find_by_username(self, username: str) -> User | None:
        return db.session.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

    def find_by_email(self, email: str) -> User | None:
        return db.session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        ).scalar_one_or_none()

    def create_user(
        self,
        username: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
        first_name: str | None = None,
        last_name: str | None = None,
        actor: User | None = None,
    ) -> User:
        """Create and commit a user; uniqueness is checked before the insert."""
        if self.find_by_username(username):
            raise ConflictError("Username already taken.")
        if self.find_by_email(email):
            raise ConflictError("Email already registered.")

        user = User(
            username=username,
            email=email,
            role=role,
            first_name=first_name,
            last_name=last_name,
        )
        user.set_password(password)
        db.session.add(user)
        self.flush('create')

        self.log(actor or user, 'created', user, {'username': username, 'role': role})
        self.commit('create')
        return user

    def sign_up(self, payload: Any) -> tuple[User, str]:
        """
        Register a new account and issue its first token.

        The admin role cannot be self-assigned; admins are created from the CLI.

        Raises:
            ValidationError: invalid or missing fields
            AuthorizationError: the admin role was requested
            ConflictError: username or email already in use
        """
        data = validate_payload(SignUpForm, payload)
        role = UserRole(data['role']) if data.get('role') else UserRole.USER
        if role == UserRole.ADMIN:
            raise AuthorizationError("The admin role cannot be requested at sign-up")

        user = self.create_user(
            username=data['username'],
            email=data['email'],
            password=data['password'],
            role=role,
            first_name=data.get('first_name'),
            last_name=data.get('last_name'),
        )
        current_app.logger.info(f"New account registered: {user.username}")
        return user, issue_token(user)

    def sign_in(self, payload: Any) -> tuple[User, str]:
        data = validate_payload(SignInForm, payload)
        user = self.find_by_username(data['username'])
        if user is None or not user.check_password(data['password']):
            current_app.logger.warning(f"Failed sign-in for username {data['username']!r}")
            raise AuthenticationError("Invalid credentials.")
        return user, issue_token(user)

    def set_password(self, user: User, password: str) -> None:
        user.set_password(password)
        self.log(None, 'password_changed', user)
        self.commit('update')

    def set_role(self, user: User, role: UserRole) -> None:
        if user.role != role:
            user.role = role
            self.log(None, 'role_changed', user, {'role': role})
            self.commit('update')


user_service = UserService()

__all__ = ['UserService', 'user_service']
