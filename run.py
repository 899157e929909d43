# ==============================================================================
# run.py
# ------------------------------------------------------------------------------
# The main entry point to launch the Sales Portal API.
# ==============================================================================

from portal import create_app, db

# Create the Flask application instance using the factory function
app = create_app()

@app.shell_context_processor
def make_shell_context():
    """Provides a shell context for the `flask shell` command."""
    from portal.access.repository import TableRepository
    from portal.access.sources import build_table_source
    return {
        'db': db,
        'TableRepository': TableRepository,
        'build_table_source': build_table_source,
    }

if __name__ == '__main__':
    app.run(debug=True)
