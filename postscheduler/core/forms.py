"""
Request Body Forms (Base)

The API accepts JSON and url-encoded bodies alike. Forms built through
`form_from_request` validate whichever one the request carries.
"""

from flask import request
from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict


class ApiForm(FlaskForm):
    class Meta:
        # No CSRF token in request bodies
        csrf = False


def request_payload() -> MultiDict:
    """Body of the current request as a MultiDict (JSON object or form)."""
    if request.is_json:
        data = request.get_json(silent=True)
        # Arrays, strings and malformed JSON count as an empty body
        return MultiDict(data if isinstance(data, dict) else {})
    return MultiDict(request.form)


def form_from_request(form_class):
    return form_class(formdata=request_payload())
