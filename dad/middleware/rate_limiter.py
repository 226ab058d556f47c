"""
Rate limiting configuration.

Applies per-blueprint rate limits using Flask-Limiter.
The Limiter instance is created in dad/__init__.py with no default limits;
this module applies granular limits per route category.

Usage:
    from dad.middleware.rate_limiter import init_rate_limits
    init_rate_limits(app, limiter)
"""

import logging

logger = logging.getLogger(__name__)

# Pure computation endpoints: cheap, called on every keystroke of the search box
COMPUTE_BLUEPRINTS = ("options", "matrix", "projects", "indicators")


def init_rate_limits(app, limiter):
    """
    Apply rate limits to API blueprints.

    Limits (per remote IP):
        - Export:           EXPORT_RATE_LIMIT (default 10/minute, workbook builds)
        - Compute routes:   API_RATE_LIMIT    (default 200/minute)
        - Health check:     exempt

    Rate limiting is disabled in testing mode.
    """
    if app.config.get("TESTING"):
        app.logger.info("Rate limiter disabled (TESTING=True)")
        return

    export_limit = app.config.get("EXPORT_RATE_LIMIT", "10/minute")
    api_limit = app.config.get("API_RATE_LIMIT", "200/minute")

    bp = app.blueprints.get("export")
    if bp:
        limiter.limit(export_limit)(bp)

    for bp_name in COMPUTE_BLUEPRINTS:
        bp = app.blueprints.get(bp_name)
        if bp:
            limiter.limit(api_limit)(bp)

    bp = app.blueprints.get("health")
    if bp:
        limiter.exempt(bp)

    app.logger.info(
        "Rate limiter configured - export: %s, compute: %s, health: exempt",
        export_limit, api_limit,
    )
