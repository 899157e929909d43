# ==============================================================================
# portal/main/forms.py
# ------------------------------------------------------------------------------
# Parses the portal query parameters using Flask-WTF.
# ==============================================================================

from flask_wtf import FlaskForm
from wtforms import StringField

class PortalQueryForm(FlaskForm):
    """
    The flat parameter set of the portal endpoint. Every field is optional and
    defaults to an empty string. Read from the query string or a form body.
    """
    class Meta:
        # Stateless read-only endpoint.
        csrf = False

    action = StringField('action', default='')
    role = StringField('role', default='')
    code = StringField('code', default='')
    filterType = StringField('filterType', default='')
    filterValue = StringField('filterValue', default='')

    def to_params(self):
        """Returns the parsed fields as a plain dict of strings."""
        return {name: field.data or '' for name, field in self._fields.items()}
