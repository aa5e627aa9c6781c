"""
Localization and response-shaping core for the logo backend.

Nothing in this package imports the web framework or touches the database,
so it can be used from routes, scripts and tests alike.
"""
