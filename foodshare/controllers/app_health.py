"""Controllers for Flask-RESTful resources: provide endpoint to test health of application."""


def heartbeat( storage_backend ):
    """Controller for simple heartbeat, reporting the active storage backend."""

    return {
        'success': True,
        'backend': storage_backend.name,
        'available': storage_backend.is_available()
    }
