from wtforms import PasswordField, StringField
from wtforms.validators import DataRequired

from postscheduler.core.forms import ApiForm


class CredentialsForm(ApiForm):
    email = StringField('Email', validators=[DataRequired(message="Email is required")])
    password = PasswordField('Password', validators=[DataRequired(message="Password is required")])


class SignupForm(CredentialsForm):
    pass


class LoginForm(CredentialsForm):
    pass
