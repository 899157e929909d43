# ==============================================================================
# portal/main/routes.py
# ------------------------------------------------------------------------------
# The portal endpoint. Parses the parameters, runs the query against a fresh
# repository and returns the result as JSON. Failures are reported as JSON
# error objects, never as raw server errors.
# ==============================================================================

from flask import request, current_app, jsonify

from portal import db
from portal.main import bp
from portal.main.forms import PortalQueryForm
from portal.access.dispatcher import QueryDispatcher
from portal.access.repository import TableRepository
from portal.access.sources import build_table_source

# --- Helper Functions ---

def build_repository():
    """Creates a repository over the data source selected in the app config."""
    config = current_app.config
    source = build_table_source(config, engine=db.engine)
    return TableRepository(source,
                           sheets=config.get('PORTAL_SHEETS'),
                           timezone=config.get('PORTAL_TIMEZONE', 'UTC'))

@bp.after_request
def allow_cross_origin(response):
    """Lets the static portal pages call the API from the browser."""
    origin = current_app.config.get('CORS_ALLOW_ORIGIN')
    if origin:
        response.headers.setdefault('Access-Control-Allow-Origin', origin)
    return response

# --- Main Application Routes ---

@bp.route('/', methods=['GET', 'POST'])
@bp.route('/api', methods=['GET', 'POST'])
def portal_api():
    """Handles every portal action: login, getUsers, getMasterData and help."""
    form = PortalQueryForm(formdata=request.values)
    params = form.to_params()

    try:
        repository = build_repository()
        result = QueryDispatcher(repository).dispatch(params)
    except Exception as e:
        current_app.logger.error(f"Portal query failed for action '{params.get('action')}': {e}", exc_info=True)
        result = {'error': f"{type(e).__name__}: {e}"}

    return jsonify(result)
