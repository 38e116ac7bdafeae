from wtforms import StringField
from wtforms.validators import InputRequired

from postscheduler.core.forms import ApiForm


class SchedulePostForm(ApiForm):
    # Whitespace-only values count as present
    content = StringField('Content', validators=[InputRequired()])
    # Clients send camelCase; stored as date_time
    date_time = StringField('Date and time', name='dateTime', validators=[InputRequired()])
    platform = StringField('Platform', validators=[InputRequired()])
